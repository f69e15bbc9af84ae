"""Resolution of free-form responsible-user identifiers."""

import logging

from todoist_mcp.client import TodoistClient
from todoist_mcp.errors import AmbiguousUserError, UserNotFoundError
from todoist_mcp.models.entities import CollaboratorModel
from todoist_mcp.models.output import ResolvedUser
from todoist_mcp.utils.pagination import collect_all
from todoist_mcp.utils.parsers import map_collaborator, map_project, map_user

logger = logging.getLogger(__name__)

ME_ALIASES = {"me", "myself"}


def match_user(
    identifier: str,
    candidates: list[CollaboratorModel],
    me: CollaboratorModel | None = None,
) -> ResolvedUser:
    """
    Match an identifier against candidate users.

    Order: "me" -> exact id -> exact email (case-insensitive) -> substring of
    name or email (case-insensitive). The substring step must be unique.

    Raises:
        UserNotFoundError: If nothing matches
        AmbiguousUserError: If the substring step matches several users
    """
    needle = identifier.strip()
    lowered = needle.lower()

    if me is not None and lowered in ME_ALIASES:
        return _resolved(me)

    pool = _dedupe(([me] if me is not None else []) + candidates)

    for user in pool:
        if user.id == needle:
            return _resolved(user)

    for user in pool:
        if user.email and user.email.lower() == lowered:
            return _resolved(user)

    matches = [user for user in pool if lowered in user.name.lower() or lowered in user.email.lower()]
    if len(matches) == 1:
        return _resolved(matches[0])
    if len(matches) > 1:
        raise AmbiguousUserError(identifier, [f"{u.name} <{u.email}> (id={u.id})" for u in matches])
    raise UserNotFoundError(identifier)


async def load_candidates(client: TodoistClient) -> tuple[CollaboratorModel, list[CollaboratorModel]]:
    """Fetch the current user plus collaborators of every shared project."""
    me = map_user(await client.get_user())
    current = CollaboratorModel(id=me.id, name=me.full_name, email=me.email)

    projects = [map_project(raw) for raw in await collect_all(client.get_projects)]
    collaborators: list[CollaboratorModel] = []
    for project in projects:
        if not project.is_shared:
            continue

        async def fetch(cursor: str | None, project_id: str = project.id):
            return await client.get_project_collaborators(project_id, cursor=cursor)

        collaborators.extend(map_collaborator(raw) for raw in await collect_all(fetch))

    logger.debug(f"Loaded {len(collaborators)} collaborator record(s) from shared projects")
    return current, _dedupe(collaborators)


async def resolve_responsible_user(client: TodoistClient, identifier: str | None) -> ResolvedUser | None:
    """
    Resolve a user ID, email, or (partial) name to a ResolvedUser.

    Returns:
        None when no identifier was given; resolution was not requested
    """
    if identifier is None or not identifier.strip():
        return None

    me, candidates = await load_candidates(client)
    resolved = match_user(identifier, candidates, me=me)
    logger.info(f"Resolved responsible user '{identifier}' to {resolved.user_id}")
    return resolved


def _resolved(user: CollaboratorModel) -> ResolvedUser:
    return ResolvedUser(user_id=user.id, email=user.email, name=user.name)


def _dedupe(users: list[CollaboratorModel]) -> list[CollaboratorModel]:
    seen: set[str] = set()
    unique: list[CollaboratorModel] = []
    for user in users:
        if user.id not in seen:
            seen.add(user.id)
            unique.append(user)
    return unique
