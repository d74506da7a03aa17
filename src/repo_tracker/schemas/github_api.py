"""Pydantic schemas for parsing GitHub GraphQL responses.

These schemas mirror the shape of the repository view query issued by
GitHubClient.get_repository(). See:
https://docs.github.com/en/graphql/reference/objects#repository
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .issue import TrackedIssue


class GraphQLModel(BaseModel):
    """Base for GraphQL payloads (camelCase keys, unknown keys ignored)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class GitHubNamedNode(GraphQLModel):
    """Node exposing only a name (languages, labels, topics)."""

    name: str


class GitHubNamedConnection(GraphQLModel):
    """Connection of named nodes."""

    nodes: list[GitHubNamedNode | None] | None = None

    def names(self) -> list[str] | None:
        """Node names, skipping null nodes (None if nodes is null)."""
        if self.nodes is None:
            return None
        return [node.name for node in self.nodes if node is not None]


class GitHubTopicNode(GraphQLModel):
    """RepositoryTopic node."""

    topic: GitHubNamedNode


class GitHubTopicConnection(GraphQLModel):
    """Connection of repository topics."""

    nodes: list[GitHubTopicNode | None] | None = None


class GitHubPageInfo(GraphQLModel):
    """Cursor pagination info."""

    has_next_page: bool = Field(alias="hasNextPage")
    end_cursor: str | None = Field(default=None, alias="endCursor")


class GitHubIssueNode(GraphQLModel):
    """Issue node from the open issues connection."""

    database_id: int = Field(alias="databaseId")
    number: int
    title: str
    url: str
    created_at: datetime = Field(alias="createdAt")
    labels: GitHubNamedConnection | None = None

    def to_tracked_issue(self) -> TrackedIssue:
        """Convert to a TrackedIssue with its digest computed."""
        issue = TrackedIssue(
            issue_id=self.database_id,
            title=self.title,
            url=self.url,
            number=self.number,
            labels=(self.labels.names() or []) if self.labels else [],
            published_at=self.created_at,
        )
        issue.update_digest()
        return issue


class GitHubIssueConnection(GraphQLModel):
    """One page of the open issues connection."""

    page_info: GitHubPageInfo = Field(alias="pageInfo")
    nodes: list[GitHubIssueNode | None] = Field(default_factory=list)


class GitHubRepositoryNode(GraphQLModel):
    """Repository object as returned by one page of the view query."""

    stargazer_count: int = Field(alias="stargazerCount")
    repository_topics: GitHubTopicConnection = Field(alias="repositoryTopics")
    languages: GitHubNamedConnection | None = None
    issues: GitHubIssueConnection


class GitHubRepositoryView(BaseModel):
    """Current GitHub state of a repository.

    Assembled from all pages of the view query: metadata from the first
    page plus the complete collection of open issues.
    """

    topics: list[str] | None = Field(default=None, description="Topic names")
    languages: list[str] | None = Field(default=None, description="Language names")
    stargazer_count: int = Field(ge=0, description="Number of stars")
    open_issues: list[GitHubIssueNode] = Field(default_factory=list)

    @classmethod
    def from_node(cls, node: GitHubRepositoryNode) -> "GitHubRepositoryView":
        """Build a view from the first page's repository node."""
        topics: list[str] | None = None
        if node.repository_topics.nodes is not None:
            topics = [n.topic.name for n in node.repository_topics.nodes if n is not None]
        return cls(
            topics=topics,
            languages=node.languages.names() if node.languages else None,
            stargazer_count=node.stargazer_count,
            open_issues=[n for n in node.issues.nodes if n is not None],
        )

    def issues(self) -> list[TrackedIssue]:
        """Open issues converted to TrackedIssue objects with digests."""
        return [node.to_tracked_issue() for node in self.open_issues]
