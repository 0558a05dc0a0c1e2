"""Pure rendering of browser state into button grids and header text."""

from typing import List, Sequence

from ..models import BrowserMode, Entry, Session
from ..schemas import ActionToken, ActionType, Button, ViewDescriptor
from .pager import DEFAULT_PAGE_SIZE, page_count, paginate

DIRECTORY_ICON = "📁"
FILE_ICON = "📄"


def entry_button(entry: Entry) -> Button:
    """Label with the final path segment, keep the full path in the token."""
    if entry.is_directory:
        token = ActionToken(action=ActionType.ENTER_DIRECTORY, path=entry.path)
        return Button(label=f"{DIRECTORY_ICON} {entry.name}", token=token.encode())
    token = ActionToken(action=ActionType.FETCH_FILE, path=entry.path)
    return Button(label=f"{FILE_ICON} {entry.name}", token=token.encode())


def _control(label: str, action: ActionType) -> Button:
    return Button(label=label, token=ActionToken(action=action).encode())


def render_view(
    entries: Sequence[Entry],
    page_index: int,
    mode: BrowserMode,
    current_path: str = "",
    page_size: int = DEFAULT_PAGE_SIZE,
) -> ViewDescriptor:
    """Build the keyboard for one page of ``entries``.

    Entry rows come first, one button per row, followed by exactly one
    control row. While waiting for a search keyword no entries are shown.
    """
    rows: List[List[Button]] = []
    controls: List[Button] = []

    if mode != BrowserMode.AWAITING_SEARCH_KEYWORD:
        page = paginate(entries, page_index, page_size)
        rows.extend([entry_button(entry)] for entry in page.items)
        if page.has_prev:
            controls.append(_control("⬅️ Prev", ActionType.PAGE_PREV))
        if page.has_next:
            controls.append(_control("Next ➡️", ActionType.PAGE_NEXT))

    if mode == BrowserMode.BROWSING:
        if current_path:
            controls.append(_control("🔙 Back", ActionType.BACK))
        controls.append(_control("🔍 Search", ActionType.START_SEARCH))
    else:
        controls.append(_control("✖️ Cancel search", ActionType.CANCEL_SEARCH))

    rows.append(controls)
    return ViewDescriptor(rows=rows)


def render_session(session: Session, page_size: int = DEFAULT_PAGE_SIZE) -> ViewDescriptor:
    return render_view(
        session.visible_entries,
        session.page,
        session.mode,
        current_path=session.current_path,
        page_size=page_size,
    )


def render_header(session: Session, page_size: int = DEFAULT_PAGE_SIZE) -> str:
    """Message text shown above the keyboard."""
    repository = session.repository
    title = repository.full_name
    if repository.branch:
        title = f"{title} ({repository.branch})"

    if session.mode == BrowserMode.AWAITING_SEARCH_KEYWORD:
        return f"🔍 {title}\nSend a keyword to search file paths."

    pages = page_count(len(session.visible_entries), page_size)
    position = f"Page {session.page + 1}/{pages}"

    if session.mode == BrowserMode.SHOWING_SEARCH_RESULTS:
        count = len(session.visible_entries)
        return (
            f"🔍 {title}\n"
            f"{count} file(s) matching '{session.search_keyword}'\n{position}"
        )

    location = f"/{session.current_path}" if session.current_path else "/"
    if not session.visible_entries:
        return f"📂 {title}\n{location}\n(empty)"
    return f"📂 {title}\n{location}\n{position}"
