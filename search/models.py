"""Models for search cycles, UI modes and the commands that drive them."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from catalog.models import DetailRecord

NO_RESULTS_MESSAGE = "No movies found"
FETCH_ERROR_MESSAGE = "Error fetching movies"
SEARCHING_MESSAGE = "Searching..."


def parse_query(raw: str | None) -> str | None:
    """Return the trimmed query, or None when nothing searchable was typed."""
    if raw is None:
        return None
    query = raw.strip()
    return query or None


class ResultSet(BaseModel):
    """Enriched titles of one search cycle, in search-endpoint order."""

    model_config = ConfigDict(frozen=True)

    items: tuple[DetailRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.items)


class ModeKind(StrEnum):
    IDLE = "idle"
    SEARCHING = "searching"
    ERROR = "error"
    POPULATED = "populated"


class UIMode(BaseModel):
    """What the result area currently shows. Exactly one mode is active at a time."""

    model_config = ConfigDict(frozen=True)

    kind: ModeKind
    message: str | None = None
    results: ResultSet | None = None

    @classmethod
    def idle(cls) -> "UIMode":
        return cls(kind=ModeKind.IDLE)

    @classmethod
    def searching(cls) -> "UIMode":
        return cls(kind=ModeKind.SEARCHING, message=SEARCHING_MESSAGE)

    @classmethod
    def error(cls, message: str) -> "UIMode":
        return cls(kind=ModeKind.ERROR, message=message)

    @classmethod
    def populated(cls, results: ResultSet) -> "UIMode":
        return cls(kind=ModeKind.POPULATED, results=results)

    @property
    def background_active(self) -> bool:
        """The decorative background runs only while no results or status are on screen."""
        return self.kind in (ModeKind.IDLE, ModeKind.ERROR)


class OverlayState(BaseModel):
    """Closed, or open on one title."""

    model_config = ConfigDict(frozen=True)

    item: DetailRecord | None = None

    @classmethod
    def closed(cls) -> "OverlayState":
        return cls()

    @classmethod
    def open(cls, item: DetailRecord) -> "OverlayState":
        return cls(item=item)

    @property
    def is_open(self) -> bool:
        return self.item is not None


class SubmitQuery(BaseModel):
    """The user submitted the search box (button or Enter)."""

    model_config = ConfigDict(frozen=True)

    text: str


class ClearSearch(BaseModel):
    """The user cleared the search; return to idle."""

    model_config = ConfigDict(frozen=True)


SearchCommand = SubmitQuery | ClearSearch


class QueryRequest(BaseModel):
    """Request body for POST /search."""

    query: str


class KeyPressRequest(BaseModel):
    """Request body for POST /keys."""

    key: str


class SessionSnapshot(BaseModel):
    """Everything the shell needs to draw the page."""

    mode: UIMode
    overlay: OverlayState
    background_animation: bool
    content_html: str
    overlay_html: str | None = None
    dismiss_listeners: int = 0
