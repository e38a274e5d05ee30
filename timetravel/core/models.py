"""
Document History Format (DHF) model.

A document is a commit ledger plus one ordered content stream. Every segment
of the stream is classified (unchanged/added/modified/deleted) and, unless
unchanged, points at the commit(s) that produced it.

All types are immutable. Use from_dict() to build them from decoded JSON and
to_dict() to get back the wire shape.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .errors import DocumentFormatError


class SegmentType(str, Enum):
    UNCHANGED = "unchanged"
    ADDED = "added"
    DELETED = "deleted"
    MODIFIED = "modified"


class Action(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"


def _require(data: Dict[str, Any], key: str, where: str) -> Any:
    if key not in data or data[key] is None:
        raise DocumentFormatError(f"{where}: missing required field '{key}'")
    return data[key]


def _require_str(data: Dict[str, Any], key: str, where: str) -> str:
    value = _require(data, key, where)
    if not isinstance(value, str):
        raise DocumentFormatError(f"{where}: field '{key}' must be a string, got {type(value).__name__}")
    return value


def _str_field(data: Dict[str, Any], key: str, where: str, default: Optional[str] = "") -> Optional[str]:
    """
    String field with a default for a missing key.

    null is only accepted where the default itself is None.
    """
    value = data.get(key, default)
    if value is None and default is None:
        return None
    if not isinstance(value, str):
        raise DocumentFormatError(f"{where}: field '{key}' must be a string, got {type(value).__name__}")
    return value


def _int_field(data: Dict[str, Any], key: str, where: str, default: int = 0) -> int:
    value = data.get(key, default)
    if isinstance(value, bool):
        raise DocumentFormatError(f"{where}: field '{key}' must be an integer, got bool")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise DocumentFormatError(f"{where}: field '{key}' must be an integer, got {value!r}")


def _require_mapping(data: Any, where: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise DocumentFormatError(f"{where}: expected an object, got {type(data).__name__}")
    return data


def _enum_value(enum_cls, raw: Any, where: str):
    try:
        return enum_cls(raw)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise DocumentFormatError(f"{where}: unknown value {raw!r} (expected one of: {allowed})")


def _drop_none(d: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}


@dataclass(frozen=True)
class Commit:
    """
    One entry of the commit ledger.

    Ledger position is the only temporal ordering; ``date`` is informational.
    """
    id: str
    author: str = ""
    date: str = ""
    message: str = ""
    email: Optional[str] = None

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Commit":
        data = _require_mapping(data, "commit")
        return Commit(
            id=_require_str(data, "id", "commit"),
            author=_str_field(data, "author", "commit"),
            date=_str_field(data, "date", "commit"),
            message=_str_field(data, "message", "commit"),
            email=_str_field(data, "email", "commit", default=None),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "id": self.id,
            "author": self.author,
            "email": self.email,
            "date": self.date,
            "message": self.message,
        })


@dataclass(frozen=True)
class Modification:
    """Sub-string edit inside a segment. Descriptive only, never replayed."""
    offset: int
    old: str
    new: str

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Modification":
        data = _require_mapping(data, "modification")
        return Modification(
            offset=_int_field(data, "offset", "modification"),
            old=_str_field(data, "old", "modification"),
            new=_str_field(data, "new", "modification"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"offset": self.offset, "old": self.old, "new": self.new}


def _modifications_from(raw: Any) -> Optional[Tuple[Modification, ...]]:
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise DocumentFormatError("modifications: expected a list")
    return tuple(Modification.from_dict(m) for m in raw)


def _modifications_to(mods: Optional[Tuple[Modification, ...]]) -> Optional[List[Dict[str, Any]]]:
    if mods is None:
        return None
    return [m.to_dict() for m in mods]


@dataclass(frozen=True)
class Change:
    """Summary of the latest edit of a segment that has no full history."""
    commit: str
    before: Optional[str] = None
    modifications: Optional[Tuple[Modification, ...]] = None

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Change":
        data = _require_mapping(data, "change")
        return Change(
            commit=_require_str(data, "commit", "change"),
            before=_str_field(data, "before", "change", default=None),
            modifications=_modifications_from(data.get("modifications")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "commit": self.commit,
            "before": self.before,
            "modifications": _modifications_to(self.modifications),
        })


@dataclass(frozen=True)
class HistoryEntry:
    """
    One edit event against a segment, tied to exactly one commit.

    ``after`` holds the text produced by a modification, ``text`` the text
    introduced by an addition. Either may be absent in imperfect data.
    """
    commit: str
    action: Action
    author: str = ""
    date: str = ""
    message: str = ""
    before: Optional[str] = None
    after: Optional[str] = None
    text: Optional[str] = None
    modifications: Optional[Tuple[Modification, ...]] = None

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "HistoryEntry":
        data = _require_mapping(data, "history entry")
        return HistoryEntry(
            commit=_require_str(data, "commit", "history entry"),
            action=_enum_value(Action, _require(data, "action", "history entry"), "history entry action"),
            author=_str_field(data, "author", "history entry"),
            date=_str_field(data, "date", "history entry"),
            message=_str_field(data, "message", "history entry"),
            before=_str_field(data, "before", "history entry", default=None),
            after=_str_field(data, "after", "history entry", default=None),
            text=_str_field(data, "text", "history entry", default=None),
            modifications=_modifications_from(data.get("modifications")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "commit": self.commit,
            "author": self.author,
            "date": self.date,
            "message": self.message,
            "action": self.action.value,
            "before": self.before,
            "after": self.after,
            "text": self.text,
            "modifications": _modifications_to(self.modifications),
        })

    def resolved_text(self) -> Optional[str]:
        """Text this entry leaves behind: ``after``, else ``text``, else None."""
        if self.after is not None:
            return self.after
        return self.text


@dataclass(frozen=True)
class Segment:
    """
    Contiguous unit of document text with one lifecycle classification.

    When both are present, ``history`` is authoritative and ``change`` only
    summarizes the latest edit.
    """
    type: SegmentType
    text: str
    change: Optional[Change] = None
    history: Optional[Tuple[HistoryEntry, ...]] = None

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Segment":
        data = _require_mapping(data, "segment")
        change = data.get("change")
        history = data.get("history")
        if history is not None and not isinstance(history, list):
            raise DocumentFormatError("segment history: expected a list")
        return Segment(
            type=_enum_value(SegmentType, _require(data, "type", "segment"), "segment type"),
            text=_str_field(data, "text", "segment"),
            change=Change.from_dict(change) if change is not None else None,
            history=tuple(HistoryEntry.from_dict(h) for h in history) if history is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "type": self.type.value,
            "text": self.text,
            "change": self.change.to_dict() if self.change is not None else None,
            "history": [h.to_dict() for h in self.history] if self.history is not None else None,
        })

    @property
    def has_history(self) -> bool:
        return bool(self.history)


@dataclass(frozen=True)
class DocumentInfo:
    path: str = ""
    repo: str = ""
    branch: str = ""
    current_commit: str = ""
    generated_at: str = ""

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "DocumentInfo":
        data = _require_mapping(data, "document")
        return DocumentInfo(
            path=_str_field(data, "path", "document"),
            repo=_str_field(data, "repo", "document"),
            branch=_str_field(data, "branch", "document"),
            current_commit=_str_field(data, "current_commit", "document"),
            generated_at=_str_field(data, "generated_at", "document"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "repo": self.repo,
            "branch": self.branch,
            "current_commit": self.current_commit,
            "generated_at": self.generated_at,
        }


@dataclass(frozen=True)
class DocumentView:
    since: str = ""
    until: str = ""

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "DocumentView":
        data = _require_mapping(data, "view")
        return DocumentView(since=_str_field(data, "since", "view"), until=_str_field(data, "until", "view"))

    def to_dict(self) -> Dict[str, Any]:
        return {"since": self.since, "until": self.until}


@dataclass(frozen=True)
class AuthorStat:
    name: str
    commits: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "commits": self.commits}


@dataclass(frozen=True)
class Summary:
    total_commits: int = 0
    authors: Tuple[AuthorStat, ...] = ()
    lines_added: int = 0
    lines_deleted: int = 0
    lines_modified: int = 0

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Summary":
        data = _require_mapping(data, "summary")
        authors = []
        for a in data.get("authors") or []:
            a = _require_mapping(a, "summary author")
            authors.append(AuthorStat(
                name=_str_field(a, "name", "summary author"),
                commits=_int_field(a, "commits", "summary author"),
            ))
        return Summary(
            total_commits=_int_field(data, "total_commits", "summary"),
            authors=tuple(authors),
            lines_added=_int_field(data, "lines_added", "summary"),
            lines_deleted=_int_field(data, "lines_deleted", "summary"),
            lines_modified=_int_field(data, "lines_modified", "summary"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_commits": self.total_commits,
            "authors": [a.to_dict() for a in self.authors],
            "lines_added": self.lines_added,
            "lines_deleted": self.lines_deleted,
            "lines_modified": self.lines_modified,
        }


@dataclass(frozen=True)
class Document:
    """
    Fully materialized document: commit ledger (oldest first) plus content.

    Only ``commits`` and ``content`` take part in reconstruction; the rest is
    carried through for display.
    """
    commits: Tuple[Commit, ...] = ()
    content: Tuple[Segment, ...] = ()
    info: Optional[DocumentInfo] = None
    view: Optional[DocumentView] = None
    summary: Optional[Summary] = None

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Document":
        data = _require_mapping(data, "document root")
        commits = _require(data, "commits", "document root")
        content = _require(data, "content", "document root")
        if not isinstance(commits, list):
            raise DocumentFormatError("commits: expected a list")
        if not isinstance(content, list):
            raise DocumentFormatError("content: expected a list")
        return Document(
            commits=tuple(Commit.from_dict(c) for c in commits),
            content=tuple(Segment.from_dict(s) for s in content),
            info=DocumentInfo.from_dict(data["document"]) if data.get("document") is not None else None,
            view=DocumentView.from_dict(data["view"]) if data.get("view") is not None else None,
            summary=Summary.from_dict(data["summary"]) if data.get("summary") is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "document": self.info.to_dict() if self.info is not None else None,
            "view": self.view.to_dict() if self.view is not None else None,
            "commits": [c.to_dict() for c in self.commits],
            "content": [s.to_dict() for s in self.content],
            "summary": self.summary.to_dict() if self.summary is not None else None,
        })

    def commit_index(self, commit_id: str) -> int:
        """Ledger position of ``commit_id`` (first match), or -1 if absent."""
        for i, c in enumerate(self.commits):
            if c.id == commit_id:
                return i
        return -1

    @property
    def latest_commit(self) -> Optional[Commit]:
        return self.commits[-1] if self.commits else None
