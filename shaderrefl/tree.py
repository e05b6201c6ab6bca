"""Rebuild nested constant trees from flat introspection records."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .errors import MalformedNameError, OrphanVariableError
from .model import STRUCT_TYPE_NAME, ConstantNode, FlatVariable, StorageOrder
from .names import parse_variable_path, strip_array_zero


logger = logging.getLogger(__name__)


@dataclass
class _WorkingNode:
    name: str
    record: FlatVariable
    elements: int
    storage: StorageOrder
    is_struct: bool
    members: "_SiblingList" = field(default_factory=lambda: _SiblingList())

    @classmethod
    def structure(cls, name: str, record: FlatVariable, elements: int) -> "_WorkingNode":
        return cls(name, record, elements, StorageOrder(record.storage.vec, 0), True)

    @classmethod
    def leaf(cls, name: str, record: FlatVariable, elements: int) -> "_WorkingNode":
        return cls(name, record, elements, record.storage, False)

    def freeze(self) -> ConstantNode:
        record = self.record
        if self.is_struct:
            return ConstantNode(
                name=self.name,
                base_type=record.base_type,
                rows=0,
                cols=0,
                elements=self.elements,
                row_major=False,
                storage=self.storage,
                type_name=STRUCT_TYPE_NAME,
                members=self.members.freeze(),
            )
        return ConstantNode(
            name=self.name,
            base_type=record.base_type,
            rows=record.rows,
            cols=record.cols,
            elements=self.elements,
            row_major=record.row_major,
            storage=self.storage,
            type_name=record.type_name,
        )


class _SiblingList:
    """Find-or-create map for one tree level, keyed by name in discovery order."""

    def __init__(self) -> None:
        self._nodes: Dict[str, _WorkingNode] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def get(self, name: str) -> Optional[_WorkingNode]:
        return self._nodes.get(name)

    def put(self, node: _WorkingNode) -> None:
        # re-assigning an existing key keeps its original position
        self._nodes[node.name] = node

    def freeze(self) -> Tuple[ConstantNode, ...]:
        frozen = [node.freeze() for node in self._nodes.values()]
        frozen.sort(key=lambda node: node.storage)
        return tuple(frozen)


@dataclass(frozen=True)
class ReconstructedTree:
    """Result of :meth:`TreeBuilder.build`.

    ``ungrouped`` is ``None`` when the pass was run without a fallback list
    (storage-buffer variables always belong to a block).  ``dropped`` lists the
    names of records that were rejected as malformed or orphaned.
    """

    ungrouped: Optional[Tuple[ConstantNode, ...]]
    groups: Tuple[Tuple[ConstantNode, ...], ...]
    dropped: Tuple[str, ...] = ()

    def group(self, index: int) -> Tuple[ConstantNode, ...]:
        return self.groups[index]


class TreeBuilder:
    """Turn flat variable records into canonical nested constant trees.

    Records are processed in input order.  Each enclosing structure on a
    record's path is found or created in the current sibling list; array
    indices grow the structure's element count to ``max(index) + 1``.  Only
    element zero of a structure array contributes member shape, so descent
    stops after any index above zero.  Sibling lists are sorted by storage
    order once every record has been placed.
    """

    def build(
        self,
        records: Iterable[FlatVariable],
        num_groups: int,
        *,
        with_ungrouped: bool = True,
    ) -> ReconstructedTree:
        ungrouped = _SiblingList() if with_ungrouped else None
        groups = [_SiblingList() for _ in range(max(0, num_groups))]
        dropped: List[str] = []

        for record in records:
            try:
                self._insert(record, ungrouped, groups)
            except OrphanVariableError as exc:
                logger.warning("%s", exc)
                dropped.append(record.name)
            except MalformedNameError as exc:
                logger.warning("dropping variable: %s", exc)
                dropped.append(record.name)

        return ReconstructedTree(
            ungrouped=ungrouped.freeze() if ungrouped is not None else None,
            groups=tuple(group.freeze() for group in groups),
            dropped=tuple(dropped),
        )

    def _insert(
        self,
        record: FlatVariable,
        ungrouped: Optional[_SiblingList],
        groups: Sequence[_SiblingList],
    ) -> None:
        if record.base_type is None:
            return

        name, has_array_suffix = strip_array_zero(record.name)
        elements = max(1, record.elements) if has_array_suffix else 0

        siblings = self._select_parent(record, ungrouped, groups)
        path = parse_variable_path(name)

        for step in path.steps:
            count = step.index + 1 if step.index is not None else 0
            node = siblings.get(step.name)
            if node is None:
                node = _WorkingNode.structure(step.name, record, count)
                siblings.put(node)
            else:
                node.is_struct = True
                node.elements = max(node.elements, count)
                node.storage = min(node.storage, StorageOrder(record.storage.vec, 0))

            if step.index is not None and step.index > 0:
                return
            siblings = node.members

        siblings.put(_WorkingNode.leaf(path.leaf, record, elements))

    @staticmethod
    def _select_parent(
        record: FlatVariable,
        ungrouped: Optional[_SiblingList],
        groups: Sequence[_SiblingList],
    ) -> _SiblingList:
        index = record.group_index
        if index is not None and 0 <= index < len(groups):
            return groups[index]
        if ungrouped is None:
            raise OrphanVariableError(record.name, -1 if index is None else index)
        return ungrouped
