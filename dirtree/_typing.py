from typing import TypedDict


class DTStats(TypedDict):
    node_count: int
    file_count: int
    dir_count: int
    total_file_bytes: int
    clipboard_count: int


class DTStatResult(TypedDict):
    name: str
    path: str
    is_dir: bool
    size: int
    extension: str | None
    item_count: int
    created_at: float
    modified_at: float
