from __future__ import annotations

import logging
from typing import Any

import requests

from .classify import BOUNTY_SYMBOL, PENDING_PAYMENT_STATUS, classify_field_values
from .models import FieldValue, NumberValue, ProjectItem, SingleSelectValue, TextValue
from .utils import parse_github_datetime

LOGGER = logging.getLogger(__name__)

PROJECT_ID_QUERY = """
query($login: String!, $number: Int!) {
  organization(login: $login) {
    projectV2(number: $number) {
      id
    }
  }
}
""".strip()

PROJECT_ITEMS_QUERY_TEMPLATE = """
query($id: ID!) {
  node(id: $id) {
    ... on ProjectV2 {
      items(first: %(items_first)d) {
        nodes {
          id
          fieldValues(first: %(fields_first)d) {
            nodes {
              __typename
              ... on ProjectV2ItemFieldSingleSelectValue { name }
              ... on ProjectV2ItemFieldTextValue { text }
              ... on ProjectV2ItemFieldNumberValue { number }
            }
          }
          content {
            ... on Issue {
              title
              url
              createdAt
              updatedAt
              body
              assignees(first: 100) { nodes { login } }
              labels(first: 100) { nodes { name } }
            }
          }
        }
      }
    }
  }
}
""".strip()


class GraphQLError(RuntimeError):
    pass


def build_items_query(*, items_first: int = 100, fields_first: int = 100) -> str:
    return PROJECT_ITEMS_QUERY_TEMPLATE % {
        "items_first": int(items_first),
        "fields_first": int(fields_first),
    }


def run_graphql(
    graphql_url: str,
    query: str,
    variables: dict[str, Any],
    *,
    token: str,
    timeout_sec: int,
    user_agent: str,
) -> dict[str, Any]:
    headers = {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "User-Agent": user_agent,
    }
    payload = {"query": query, "variables": variables}
    response = requests.post(graphql_url, json=payload, headers=headers, timeout=timeout_sec)
    response.raise_for_status()
    body = response.json() or {}
    errors = body.get("errors")
    if errors:
        messages = ", ".join(
            str(err.get("message")) for err in errors if isinstance(err, dict)
        )
        raise GraphQLError(f"GraphQL error: {messages or errors}")
    return body.get("data") or {}


def resolve_project_id(
    *,
    graphql_url: str,
    token: str,
    timeout_sec: int,
    user_agent: str,
    org: str,
    number: int,
) -> str:
    data = run_graphql(
        graphql_url,
        PROJECT_ID_QUERY,
        {"login": org, "number": int(number)},
        token=token,
        timeout_sec=timeout_sec,
        user_agent=user_agent,
    )
    project = (data.get("organization") or {}).get("projectV2") or {}
    project_id = project.get("id")
    if not project_id:
        raise GraphQLError(f"Project {number} not found for organization {org}")
    return str(project_id)


def fetch_project_nodes(
    *,
    graphql_url: str,
    token: str,
    timeout_sec: int,
    user_agent: str,
    project_id: str,
    items_first: int = 100,
    fields_first: int = 100,
) -> list[dict[str, Any]]:
    data = run_graphql(
        graphql_url,
        build_items_query(items_first=items_first, fields_first=fields_first),
        {"id": project_id},
        token=token,
        timeout_sec=timeout_sec,
        user_agent=user_agent,
    )
    items = ((data.get("node") or {}).get("items") or {}).get("nodes") or []
    nodes = [node for node in items if isinstance(node, dict)]
    LOGGER.info("Project %s returned %s items", project_id, len(nodes))
    return nodes


def parse_field_value(node: dict[str, Any] | None) -> FieldValue | None:
    if not node:
        return None
    typename = node.get("__typename")
    if typename == "ProjectV2ItemFieldSingleSelectValue":
        return SingleSelectValue(name=node.get("name") or "")
    if typename == "ProjectV2ItemFieldTextValue":
        return TextValue(text=node.get("text") or "")
    if typename == "ProjectV2ItemFieldNumberValue":
        number = node.get("number")
        if number is None:
            return None
        return NumberValue(number=float(number))
    return None


def _connection_values(connection: dict[str, Any] | None, key: str) -> list[str]:
    nodes = (connection or {}).get("nodes") or []
    return [str(n.get(key)) for n in nodes if isinstance(n, dict) and n.get(key)]


def build_project_items(
    nodes: list[dict[str, Any]],
    *,
    status_name: str = PENDING_PAYMENT_STATUS,
    bounty_symbol: str = BOUNTY_SYMBOL,
) -> list[ProjectItem]:
    out: list[ProjectItem] = []
    for node in nodes:
        raw_values = ((node.get("fieldValues") or {}).get("nodes")) or []
        values = [v for v in (parse_field_value(raw) for raw in raw_values) if v is not None]
        result = classify_field_values(values, status_name=status_name, bounty_symbol=bounty_symbol)
        if not result.is_pending_payment:
            continue
        issue = node.get("content") or {}
        out.append(
            ProjectItem(
                id=str(node.get("id") or ""),
                title=issue.get("title") or "",
                url=issue.get("url") or "",
                created_at=parse_github_datetime(issue.get("createdAt")),
                updated_at=parse_github_datetime(issue.get("updatedAt")),
                assigned_to=_connection_values(issue.get("assignees"), "login"),
                labels=_connection_values(issue.get("labels"), "name"),
                description=issue.get("body") or "",
                recipient=result.recipient,
                bounty_amount=result.bounty_amount,
                bounty_symbol=result.bounty_symbol,
            )
        )
    return out


def fetch_pending_items(
    *,
    graphql_url: str,
    token: str,
    timeout_sec: int,
    user_agent: str,
    org: str,
    number: int,
    items_first: int = 100,
    fields_first: int = 100,
    status_name: str = PENDING_PAYMENT_STATUS,
    bounty_symbol: str = BOUNTY_SYMBOL,
) -> tuple[list[ProjectItem], str]:
    project_id = resolve_project_id(
        graphql_url=graphql_url,
        token=token,
        timeout_sec=timeout_sec,
        user_agent=user_agent,
        org=org,
        number=number,
    )
    LOGGER.info("Resolved %s project %s to %s", org, number, project_id)
    nodes = fetch_project_nodes(
        graphql_url=graphql_url,
        token=token,
        timeout_sec=timeout_sec,
        user_agent=user_agent,
        project_id=project_id,
        items_first=items_first,
        fields_first=fields_first,
    )
    items = build_project_items(nodes, status_name=status_name, bounty_symbol=bounty_symbol)
    LOGGER.info("%s of %s items are in %r status", len(items), len(nodes), status_name)
    return items, project_id
