"""Section tools: add, update and find."""

from todoist_mcp.client import TodoistClient
from todoist_mcp.enums import ToolName
from todoist_mcp.models.entities import SectionModel
from todoist_mcp.models.inputs import AddSectionsInput, FindSectionsInput, UpdateSectionsInput
from todoist_mcp.models.output import SummaryReport, ToolOutput
from todoist_mcp.tools.base import TodoistTool
from todoist_mcp.utils.formatters import format_section_line, preview_lines, summarize_batch, summarize_list
from todoist_mcp.utils.pagination import collect_all
from todoist_mcp.utils.parsers import map_section


async def add_sections(client: TodoistClient, params: AddSectionsInput) -> ToolOutput:
    """Add one or more sections to projects."""
    added: list[SectionModel] = []
    for spec in params.sections:
        raw = await client.add_section({"name": spec.name, "project_id": spec.project_id})
        added.append(map_section(raw))

    text = summarize_batch(
        "Added",
        "section",
        len(added),
        [format_section_line(s) for s in added],
        [f"Use {ToolName.ADD_TASKS.value} with section_id to add tasks to a section."],
    )
    return ToolOutput(
        text=text,
        structured={"sections": [s.model_dump(mode="json") for s in added], "total_count": len(added)},
    )


async def update_sections(client: TodoistClient, params: UpdateSectionsInput) -> ToolOutput:
    """Rename existing sections."""
    updated: list[SectionModel] = []
    for spec in params.sections:
        updated.append(map_section(await client.update_section(spec.id, {"name": spec.name})))

    text = summarize_batch("Updated", "section", len(updated), [format_section_line(s) for s in updated])
    return ToolOutput(
        text=text,
        structured={"sections": [s.model_dump(mode="json") for s in updated], "total_count": len(updated)},
    )


async def find_sections(client: TodoistClient, params: FindSectionsInput) -> ToolOutput:
    """
    List the sections of a project, optionally filtered by a case-insensitive name match.

    USE THIS WHEN:
    - Looking up a section ID before adding or moving tasks into it
    """

    async def fetch(cursor: str | None):
        return await client.get_sections(project_id=params.project_id, cursor=cursor)

    sections = [map_section(raw) for raw in await collect_all(fetch)]
    if params.search:
        needle = params.search.lower()
        sections = [s for s in sections if needle in s.name.lower()]

    filter_hints = [f"project: {params.project_id}"]
    if params.search:
        filter_hints.append(f'name contains "{params.search}"')

    text = summarize_list(
        SummaryReport(
            subject="Sections",
            count=len(sections),
            filter_hints=filter_hints,
            preview_lines=preview_lines([format_section_line(s) for s in sections], limit=20),
            zero_reason_hints=[f"Use {ToolName.ADD_SECTIONS.value} to create one"] if not params.search else [],
        )
    )
    return ToolOutput(
        text=text,
        structured={"sections": [s.model_dump(mode="json") for s in sections], "total_count": len(sections)},
    )


add_sections_tool = TodoistTool(
    name=ToolName.ADD_SECTIONS,
    title="Add Sections",
    input_model=AddSectionsInput,
    execute=add_sections,
)

update_sections_tool = TodoistTool(
    name=ToolName.UPDATE_SECTIONS,
    title="Update Sections",
    input_model=UpdateSectionsInput,
    execute=update_sections,
    idempotent=True,
)

find_sections_tool = TodoistTool(
    name=ToolName.FIND_SECTIONS,
    title="Find Sections",
    input_model=FindSectionsInput,
    execute=find_sections,
    read_only=True,
    idempotent=True,
)
