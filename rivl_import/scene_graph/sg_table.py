"""Append-only node table.

Each top-level declaration gets exactly one slot, in document order.
Unsupported or broken declarations get a None placeholder so later
indices stay aligned. References between declarations are plain
indices into this table and always point backwards.
"""

from ..exceptions import ContractViolationError, KindMismatchError
from .sg_classes import kind_of


class NodeTable:
    """Index-addressed registry of parsed scene nodes."""

    def __init__(self):
        self._nodes = []

    def append(self, node):
        """Append ``node`` (or None) and return its index."""
        index = len(self._nodes)
        self._nodes.append(node)
        if node is not None:
            node.index = index
        return index

    def get(self, index):
        """Return the entry at ``index``.

        Raises:
            IndexError: if ``index`` has not been appended yet
        """
        if index < 0 or index >= len(self._nodes):
            raise IndexError(
                f"node index {index} out of range (table has {len(self._nodes)} entries)"
            )
        return self._nodes[index]

    def contains(self, index):
        return 0 <= index < len(self._nodes)

    def resolve(self, index, kind=None, referrer=None):
        """Resolve a hard reference: the entry must exist and not be a placeholder.

        Args:
            index: node table index from the document
            kind: required node kind, or None for any kind
            referrer: index of the declaration holding the reference

        Raises:
            ContractViolationError: index out of range or placeholder entry
            KindMismatchError: entry exists but is of another kind
        """
        if not self.contains(index):
            raise ContractViolationError(
                f"reference to undeclared node {index}", referrer
            )
        node = self._nodes[index]
        if node is None:
            raise ContractViolationError(
                f"reference to placeholder entry {index}", referrer
            )
        if kind is not None and not node.is_kind(kind):
            raise KindMismatchError(kind, kind_of(node), referrer)
        return node

    def __len__(self):
        return len(self._nodes)

    def __iter__(self):
        return iter(self._nodes)

    def __getitem__(self, index):
        return self.get(index)

    def __repr__(self):
        return f"NodeTable({len(self._nodes)} entries)"
