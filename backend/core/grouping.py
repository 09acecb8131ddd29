"""
Superset / circuit grouping for the items of a block.

Grouping is purely positional: an exercise with ``is_grouped=True`` is
chained to the exercise right before it. A maximal run of chained
exercises is a Chain:

- 1 exercise: standalone
- 2 exercises: superset
- 3+ exercises: circuit

Rules kept by every function here:
- the first item of a block is never grouped
- an item right after a RestItem is never grouped (rests break chains)
- every set of every exercise in a chain has the same rest (round rest)

Chains never cross block boundaries; all functions take and return a
single Block.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from domain.models import Block, ExerciseItem, RestItem, WorkItem

logger = logging.getLogger(__name__)


class ChainKind(str, Enum):
    """Shape of a chain, by size."""

    STANDALONE = "standalone"
    SUPERSET = "superset"
    CIRCUIT = "circuit"


@dataclass
class Chain:
    """A maximal run of consecutive chained exercises in one block."""

    indices: List[int] = field(default_factory=list)
    items: List[ExerciseItem] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.items)

    @property
    def kind(self) -> ChainKind:
        if self.size > 2:
            return ChainKind.CIRCUIT
        if self.size == 2:
            return ChainKind.SUPERSET
        return ChainKind.STANDALONE

    @property
    def round_rest(self) -> Optional[int]:
        """Rest of the chain: the first set rest found from the head onwards."""
        for item in self.items:
            if item.config.sets:
                return item.config.sets[0].rest_seconds
        return None

    @property
    def has_uniform_rest(self) -> bool:
        rests = {s.rest_seconds for item in self.items for s in item.config.sets}
        return len(rests) <= 1


def can_group(items: List[WorkItem], index: int) -> bool:
    """
    Whether the item at ``index`` may be chained to its predecessor.

    Args:
        items: Items of one block.
        index: Position to check.

    Returns:
        True if both the item and its predecessor are exercises.
    """
    if index <= 0 or index >= len(items):
        return False
    return isinstance(items[index], ExerciseItem) and isinstance(items[index - 1], ExerciseItem)


def derive_chains(block: Block) -> List[Chain]:
    """
    Partition the exercises of a block into chains, left to right.

    Rest items close the current chain and belong to none.

    Examples:
        >>> block = Block(items=[
        ...     ExerciseItem(name="A"),
        ...     ExerciseItem(name="B", is_grouped=True),
        ...     ExerciseItem(name="C"),
        ... ])
        >>> [c.size for c in derive_chains(block)]
        [2, 1]
    """
    chains: List[Chain] = []
    current: Optional[Chain] = None

    for idx, item in enumerate(block.items):
        if isinstance(item, RestItem):
            current = None
            continue

        if item.is_grouped and current is not None:
            current.indices.append(idx)
            current.items.append(item)
        else:
            current = Chain(indices=[idx], items=[item])
            chains.append(current)

    return chains


def chain_at(block: Block, index: int) -> Optional[Chain]:
    """Return the chain containing the item at ``index`` (None for rests)."""
    for chain in derive_chains(block):
        if index in chain.indices:
            return chain
    return None


def set_chain_rest(block: Block, chain: Chain, seconds: int) -> Block:
    """
    Write ``seconds`` as the rest of every set of every exercise in ``chain``.

    This is the only writer of chain-level rest.

    Raises:
        ValueError: If ``seconds`` is negative or the chain does not match
            the block's current items.
    """
    if seconds < 0:
        raise ValueError(f"Rest must be >= 0 seconds, got {seconds}")

    items = list(block.items)
    for idx, chained in zip(chain.indices, chain.items):
        if idx >= len(items) or items[idx].id != chained.id:
            raise ValueError("Chain does not belong to the current block items")
        item = items[idx]
        items[idx] = item.with_sets([s.model_copy(update={"rest_seconds": seconds}) for s in item.config.sets])

    return block.with_items(items)


def toggle_group(block: Block, index: int) -> Block:
    """
    Flip ``is_grouped`` on the item at ``index``.

    No-op at block start, right after a rest item, or on a rest item. When
    the toggle joins two chains, the merged chain takes the round rest of
    its head.
    """
    if not can_group(block.items, index):
        logger.debug("Ignoring group toggle at index %d of block %s", index, block.id)
        return block

    item = block.items[index]
    items = list(block.items)
    items[index] = item.model_copy(update={"is_grouped": not item.is_grouped})
    updated = block.with_items(items)

    if items[index].is_grouped:
        chain = chain_at(updated, index)
        if chain is not None and chain.round_rest is not None and not chain.has_uniform_rest:
            updated = set_chain_rest(updated, chain, chain.round_rest)

    return updated


def normalize_grouping(block: Block) -> Block:
    """
    Re-establish the grouping rules after a structural edit.

    Clears ``is_grouped`` where it is not allowed and re-synchronises each
    chain's rest to its head. Returns the same block when nothing changes.
    """
    items = list(block.items)
    changed = False

    for idx, item in enumerate(items):
        if isinstance(item, ExerciseItem) and item.is_grouped and not can_group(items, idx):
            items[idx] = item.model_copy(update={"is_grouped": False})
            changed = True

    result = block.with_items(items) if changed else block

    for chain in derive_chains(result):
        if chain.size > 1 and not chain.has_uniform_rest and chain.round_rest is not None:
            result = set_chain_rest(result, chain, chain.round_rest)

    return result
