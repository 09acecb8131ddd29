"""
Structural edits on a session: add, remove, reorder and duplicate blocks
and work items.

This is the editing API for clients and library users that hold a session
in memory and send the result back through save. The HTTP API itself only
exposes grouping, protocol, cardio and module import edits.

Every function takes a Session and returns a new Session; the input is
never modified. Duplicates are deep copies with fresh transient ids, so no
two live blocks or items share an id. Item-level edits re-run
``normalize_grouping`` on the touched block so the grouping rules hold
after e.g. removing the head of a superset.

No validation happens here; sessions are validated when saved.
"""

from typing import Optional

from backend.core.grouping import normalize_grouping
from domain.models import Block, ExerciseItem, Session, WorkItem


def _move(seq: list, from_index: int, to_index: int) -> list:
    items = list(seq)
    if not 0 <= to_index < len(items):
        raise IndexError(f"Target index {to_index} out of range")
    item = items.pop(from_index)
    items.insert(to_index, item)
    return items


# =============================================================================
# Blocks
# =============================================================================


def add_block(session: Session, name: Optional[str] = None, position: Optional[int] = None) -> Session:
    """Insert an empty block (appended when ``position`` is None)."""
    block = Block(name=name or f"Block {len(session.blocks) + 1}")
    blocks = list(session.blocks)
    blocks.insert(len(blocks) if position is None else position, block)
    return session.with_blocks(blocks)


def remove_block(session: Session, block_index: int) -> Session:
    blocks = list(session.blocks)
    del blocks[block_index]
    return session.with_blocks(blocks)


def move_block(session: Session, from_index: int, to_index: int) -> Session:
    return session.with_blocks(_move(session.blocks, from_index, to_index))


def duplicate_block(session: Session, block_index: int) -> Session:
    """Insert a deep copy of the block right after it."""
    blocks = list(session.blocks)
    blocks.insert(block_index + 1, blocks[block_index].duplicate())
    return session.with_blocks(blocks)


def rename_block(session: Session, block_index: int, name: str) -> Session:
    block = session.blocks[block_index]
    return session.replace_block(block_index, block.model_copy(update={"name": name}))


# =============================================================================
# Work items
# =============================================================================


def _replace_items(session: Session, block_index: int, items: list) -> Session:
    block = session.blocks[block_index].with_items(items)
    return session.replace_block(block_index, normalize_grouping(block))


def add_item(
    session: Session,
    block_index: int,
    item: WorkItem,
    position: Optional[int] = None,
) -> Session:
    """
    Insert a work item into a block.

    The item is stored as a copy with a fresh id so the caller's instance
    (e.g. a library pick added twice) never aliases a live item.
    """
    items = list(session.blocks[block_index].items)
    items.insert(len(items) if position is None else position, item.duplicate())
    return _replace_items(session, block_index, items)


def remove_item(session: Session, block_index: int, item_index: int) -> Session:
    items = list(session.blocks[block_index].items)
    del items[item_index]
    return _replace_items(session, block_index, items)


def move_item(session: Session, block_index: int, from_index: int, to_index: int) -> Session:
    return _replace_items(session, block_index, _move(session.blocks[block_index].items, from_index, to_index))


def duplicate_item(session: Session, block_index: int, item_index: int) -> Session:
    """Insert a deep copy of the item right after it."""
    items = list(session.blocks[block_index].items)
    items.insert(item_index + 1, items[item_index].duplicate())
    return _replace_items(session, block_index, items)


def replace_item(session: Session, block_index: int, item_index: int, item: WorkItem) -> Session:
    """Swap the item at ``item_index``; used for config edits and exercise swaps."""
    items = list(session.blocks[block_index].items)
    items[item_index] = item
    return _replace_items(session, block_index, items)


def update_exercise(session: Session, block_index: int, item_index: int, **changes) -> Session:
    """
    Apply field changes to the exercise at ``item_index``.

    Raises:
        TypeError: If the item is a rest.
    """
    item = session.blocks[block_index].items[item_index]
    if not isinstance(item, ExerciseItem):
        raise TypeError(f"Item {item_index} of block {block_index} is not an exercise")
    updated = ExerciseItem.model_validate({**item.model_dump(), **changes})
    return replace_item(session, block_index, item_index, updated)
