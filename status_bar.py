import os
import time


def render_status(context, width):
    """
    context keys: status_msg, status_until, mode, file_path, sheet_name,
                   address, sheet_index, sheet_count
    """
    text = ""
    now = time.time()
    if context.get("status_msg") and now < context.get("status_until", 0):
        text = f" {context['status_msg']}"
    else:
        mode = "INPUT" if context.get("mode") == "input" else "NAV"
        fname = context.get("file_path") or "[new]"
        fname = os.path.basename(fname)
        sheet = context.get("sheet_name") or ""
        sheet_index = context.get("sheet_index", 0) + 1
        sheet_count = context.get("sheet_count", 1)
        address = context.get("address", "")
        text = f" {mode} | {fname} | {sheet} ({sheet_index}/{sheet_count}) | {address}"

    return text.ljust(width)[:width]


def status_context(state):
    names = state.sheet_names
    index = state.selected_sheet
    return {
        "status_msg": state.status_msg,
        "status_until": state.status_msg_until,
        "mode": state.mode.value,
        "file_path": state.file_path,
        "sheet_name": names[index] if 0 <= index < len(names) else "",
        "sheet_index": index,
        "sheet_count": len(names),
        "address": state.selected_label(),
    }
