"""Render the workspace index for the system prompt."""

from .models import WorkspaceFileDescriptor

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def render_workspace_context(descriptors: list[WorkspaceFileDescriptor]) -> str:
    """Describe every indexed entry, spreadsheets with their sheets and row counts."""
    lines = []
    for descriptor in descriptors:
        modified = descriptor.mod_time.strftime(TIMESTAMP_FORMAT)
        if descriptor.is_dir:
            lines.append(f"\n- Directory: {descriptor.path}")
        elif descriptor.is_spreadsheet:
            lines.append(f"\n- Excel file: {descriptor.path} (Modified: {modified})")
            if descriptor.sheet_names:
                lines.append("  Sheets:")
                for sheet in descriptor.sheet_names:
                    rows = descriptor.row_count.get(sheet, 0)
                    lines.append(f"    - {sheet} ({rows} rows)")
        else:
            lines.append(
                f"\n- File: {descriptor.path} "
                f"(Type: {descriptor.language}, Modified: {modified})"
            )
    return "\n".join(lines)
