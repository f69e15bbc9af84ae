"""Builders for Todoist filter-query expressions."""

from datetime import date, timedelta

from todoist_mcp.enums import LabelsOperator, OverdueOption, ResponsibleUserFiltering
from todoist_mcp.errors import InvalidArgumentError
from todoist_mcp.models.output import ResolvedUser


def append_to_query(query: str, clause: str) -> str:
    """
    Conjoin a clause onto a query with '&'.

    Empty clauses contribute nothing, so the result never carries a leading,
    trailing or doubled operator.
    """
    clause = clause.strip()
    query = query.strip()
    if not clause:
        return query
    if not query:
        return clause
    return f"{query} & {clause}"


def append_group_to_query(query: str, clause: str) -> str:
    """Conjoin a clause, parenthesized when the query already has content."""
    clause = clause.strip()
    if clause and query.strip():
        clause = f"({clause})"
    return append_to_query(query, clause)


def build_labels_filter(
    labels: list[str] | None,
    operator: LabelsOperator = LabelsOperator.OR,
) -> str:
    """
    Build the label facet.

    Examples:
        ["work", "urgent"], OR  -> "@work | @urgent"
        ["work", "urgent"], AND -> "@work & @urgent"
    """
    names = [label.strip().lstrip("@") for label in labels or [] if label.strip().lstrip("@")]
    if not names:
        return ""
    joiner = " & " if operator == LabelsOperator.AND else " | "
    return joiner.join(f"@{name}" for name in names)


def build_date_filter(
    start_date: str | None,
    days_count: int = 1,
    overdue_option: OverdueOption | None = None,
) -> str:
    """
    Build the date facet of a task query.

    Exactly one of overdue-only, "today" or an explicit YYYY-MM-DD start
    decides the clause. An explicit range ends before START + days_count.

    Raises:
        InvalidArgumentError: If neither a start date nor overdue-only is given
    """
    if overdue_option == OverdueOption.OVERDUE_ONLY:
        return "overdue"

    if not start_date:
        raise InvalidArgumentError(
            "No temporal filter specified: provide a start date or set the overdue option to overdue-only."
        )

    if start_date == "today":
        if overdue_option == OverdueOption.EXCLUDE_OVERDUE:
            return "today"
        return "(today | overdue)"

    start = parse_iso_date(start_date, "start date")
    end = start + timedelta(days=days_count)
    return f"(due after: {start.isoformat()} | due: {start.isoformat()}) & due before: {end.isoformat()}"


def build_responsible_user_filter(
    resolved: ResolvedUser | None,
    filtering: ResponsibleUserFiltering | None = None,
) -> str:
    """
    Build the assignment facet.

    A resolved user always wins; otherwise the filtering mode picks the
    clause ("all" contributes none).
    """
    if resolved is not None:
        return f"assigned to: {resolved.email}"

    filtering = filtering or ResponsibleUserFiltering.UNASSIGNED_OR_ME
    if filtering == ResponsibleUserFiltering.ASSIGNED:
        return "assigned to: others"
    if filtering == ResponsibleUserFiltering.UNASSIGNED_OR_ME:
        return "!assigned to: others"
    return ""


def build_search_filter(search_text: str | None) -> str:
    if not search_text or not search_text.strip():
        return ""
    return f"search: {search_text.strip()}"


def parse_iso_date(value: str, field_name: str = "date") -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidArgumentError(f"Invalid {field_name} '{value}'. Use YYYY-MM-DD.") from None
