"""Tests for GitHub GraphQL response schemas."""

from datetime import UTC, datetime

from repo_tracker.digest import issue_digest
from repo_tracker.schemas import GitHubIssueNode, GitHubRepositoryNode, GitHubRepositoryView
from tests.factories import make_issue_node, make_repository_node
from tests.fixtures import (
    GRAPHQL_EMPTY_REPOSITORY_RESPONSE,
    GRAPHQL_REPOSITORY_PAGE_2,
    GRAPHQL_REPOSITORY_RESPONSE,
)


class TestGitHubRepositoryNode:
    """Tests for parsing the repository view payload."""

    def test_parse_full_response(self):
        node = GitHubRepositoryNode.model_validate(GRAPHQL_REPOSITORY_RESPONSE["repository"])

        assert node.stargazer_count == 412
        assert node.issues.page_info.has_next_page is False
        assert node.issues.page_info.end_cursor == "Y3Vyc29yOjI="
        assert len(node.issues.nodes) == 2

    def test_view_from_node(self):
        node = GitHubRepositoryNode.model_validate(GRAPHQL_REPOSITORY_RESPONSE["repository"])
        view = GitHubRepositoryView.from_node(node)

        assert view.topics == ["advertising", "header-bidding"]
        assert view.languages == ["Go", "Shell"]
        assert view.stargazer_count == 412
        assert [i.number for i in view.open_issues] == [3410, 3388]

    def test_empty_repository(self):
        node = GitHubRepositoryNode.model_validate(
            GRAPHQL_EMPTY_REPOSITORY_RESPONSE["repository"]
        )
        view = GitHubRepositoryView.from_node(node)

        assert view.topics == []
        assert view.languages == []
        assert view.issues() == []

    def test_null_connections_are_absent(self):
        """Null connections mean unknown (None), not empty."""
        payload = make_repository_node()
        payload["repositoryTopics"] = {"nodes": None}
        payload["languages"] = None

        view = GitHubRepositoryView.from_node(GitHubRepositoryNode.model_validate(payload))

        assert view.topics is None
        assert view.languages is None

    def test_null_issue_nodes_skipped(self):
        payload = make_repository_node(issues=[make_issue_node(1)])
        payload["issues"]["nodes"].append(None)

        view = GitHubRepositoryView.from_node(GitHubRepositoryNode.model_validate(payload))

        assert len(view.open_issues) == 1

    def test_unknown_fields_ignored(self):
        payload = make_repository_node()
        payload["isArchived"] = False
        GitHubRepositoryNode.model_validate(payload)


class TestGitHubIssueNode:
    """Tests for converting issue nodes to tracked issues."""

    def test_to_tracked_issue(self):
        node = GitHubIssueNode.model_validate(
            GRAPHQL_REPOSITORY_RESPONSE["repository"]["issues"]["nodes"][0]
        )

        issue = node.to_tracked_issue()

        assert issue.issue_id == 2101
        assert issue.number == 3410
        assert issue.labels == ["bug", "needs-triage"]
        assert issue.published_at == datetime(2024, 1, 16, 14, 0, tzinfo=UTC)
        assert issue.digest == issue_digest("Bidder timeout not honored", ["bug", "needs-triage"])

    def test_null_labels_become_empty(self):
        node = GitHubIssueNode.model_validate(
            GRAPHQL_REPOSITORY_PAGE_2["repository"]["issues"]["nodes"][0]
        )

        assert node.to_tracked_issue().labels == []

    def test_view_issues_all_have_digests(self):
        view = GitHubRepositoryView(
            stargazer_count=0,
            open_issues=[
                GitHubIssueNode.model_validate(make_issue_node(i, labels=["x"])) for i in range(3)
            ],
        )

        assert all(issue.digest for issue in view.issues())
