"""GitHub GraphQL client for repository discussions."""

from typing import Any

import httpx

from weekly_digest.core.entities import (
    CreatedDiscussion,
    DiscussionCategory,
    DiscussionNode,
    RepositoryInfo,
)
from weekly_digest.core.interfaces import DiscussionStore

GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"

REPOSITORY_QUERY = """
query($owner: String!, $repo: String!) {
  repository(owner: $owner, name: $repo) {
    id
    discussionCategories(first: 25) {
      nodes { id name }
    }
    labels(first: 100) {
      nodes { id name }
    }
  }
}
"""

DISCUSSIONS_QUERY = """
query($owner: String!, $repo: String!, $first: Int!) {
  repository(owner: $owner, name: $repo) {
    discussions(first: $first, orderBy: {field: CREATED_AT, direction: DESC}) {
      nodes { title url body createdAt }
    }
  }
}
"""

CREATE_DISCUSSION_MUTATION = """
mutation($repositoryId: ID!, $categoryId: ID!, $title: String!, $body: String!) {
  createDiscussion(input: {
    repositoryId: $repositoryId
    categoryId: $categoryId
    title: $title
    body: $body
  }) {
    discussion { id url }
  }
}
"""

CREATE_LABEL_MUTATION = """
mutation($repositoryId: ID!, $name: String!, $color: String!) {
  createLabel(input: {repositoryId: $repositoryId, name: $name, color: $color}) {
    label { id }
  }
}
"""

ADD_LABELS_MUTATION = """
mutation($labelableId: ID!, $labelIds: [ID!]!) {
  addLabelsToLabelable(input: {labelableId: $labelableId, labelIds: $labelIds}) {
    labelable {
      ... on Discussion { id }
    }
  }
}
"""

CLOSE_DISCUSSION_MUTATION = """
mutation($discussionId: ID!) {
  closeDiscussion(input: {discussionId: $discussionId}) {
    discussion { id closed }
  }
}
"""


class GraphQLError(Exception):
    """GraphQL response carried an ``errors`` payload."""

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        self.errors = errors
        messages = "; ".join(str(e.get("message", e)) for e in errors)
        super().__init__(messages or "GraphQL request failed")


class GitHubGraphQLClient(DiscussionStore):
    """Discussion store backed by the GitHub GraphQL API.

    Does not retry; callers decide whether a failed call is worth repeating.
    """

    def __init__(
        self,
        token: str,
        api_url: str = GITHUB_GRAPHQL_URL,
        timeout: float = 30.0,
    ) -> None:
        self.token = token
        self.api_url = api_url
        self.timeout = timeout

    def _get_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"bearer {self.token}",
            "Accept": "application/vnd.github+json",
            "Content-Type": "application/json",
        }

    async def _execute(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                self.api_url,
                headers=self._get_headers(),
                json={"query": query, "variables": variables},
            )
            response.raise_for_status()
            payload = response.json()

        if payload.get("errors"):
            raise GraphQLError(payload["errors"])
        return payload.get("data") or {}

    async def fetch_repository(self, owner: str, repo: str) -> RepositoryInfo:
        data = await self._execute(REPOSITORY_QUERY, {"owner": owner, "repo": repo})
        repository = data.get("repository")
        if repository is None:
            raise GraphQLError([{"message": f"Repository {owner}/{repo} not found"}])

        return RepositoryInfo(
            id=repository["id"],
            categories=[
                DiscussionCategory(id=node["id"], name=node["name"])
                for node in repository["discussionCategories"]["nodes"]
            ],
            labels={node["name"]: node["id"] for node in repository["labels"]["nodes"]},
        )

    async def list_discussions(
        self, owner: str, repo: str, limit: int = 50
    ) -> list[DiscussionNode]:
        data = await self._execute(
            DISCUSSIONS_QUERY, {"owner": owner, "repo": repo, "first": limit}
        )
        repository = data.get("repository")
        if repository is None:
            raise GraphQLError([{"message": f"Repository {owner}/{repo} not found"}])

        return [
            DiscussionNode(
                title=node["title"],
                url=node["url"],
                body=node.get("body") or "",
                created_at=node.get("createdAt") or "",
            )
            for node in repository["discussions"]["nodes"]
        ]

    async def create_discussion(
        self, repository_id: str, category_id: str, title: str, body: str
    ) -> CreatedDiscussion:
        data = await self._execute(
            CREATE_DISCUSSION_MUTATION,
            {
                "repositoryId": repository_id,
                "categoryId": category_id,
                "title": title,
                "body": body,
            },
        )
        discussion = data["createDiscussion"]["discussion"]
        return CreatedDiscussion(id=discussion["id"], url=discussion["url"])

    async def create_label(self, repository_id: str, name: str, color: str) -> str:
        data = await self._execute(
            CREATE_LABEL_MUTATION,
            {"repositoryId": repository_id, "name": name, "color": color},
        )
        return data["createLabel"]["label"]["id"]

    async def add_labels(self, labelable_id: str, label_ids: list[str]) -> None:
        if not label_ids:
            return
        await self._execute(
            ADD_LABELS_MUTATION, {"labelableId": labelable_id, "labelIds": label_ids}
        )

    async def close_discussion(self, discussion_id: str) -> None:
        await self._execute(CLOSE_DISCUSSION_MUTATION, {"discussionId": discussion_id})
