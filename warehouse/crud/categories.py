"""
Category index: binary search tree keyed by category name.
- Left subtree names sort before a node, right subtree names after
- No duplicate names; inserting an existing name changes nothing
- Deleting a category discards every product it owns
- No rebalancing; depth follows insertion order
"""
from typing import Iterator, List, Optional, Tuple
import logging

from warehouse.crud.products import ProductCollection
from warehouse.models import CategoryNode, Product
from warehouse.schemas.inventory import CategoryInsertOutcome, CategoryDeleteOutcome

logger = logging.getLogger(__name__)


def insert_node(root: Optional[CategoryNode], name: str) -> CategoryNode:
    """Attach a new empty category under root. Returns the (new) root."""
    new_node = CategoryNode(name=name, products=ProductCollection(name))
    if root is None:
        return new_node

    node = root
    while True:
        if name < node.name:
            if node.left is None:
                node.left = new_node
                return root
            node = node.left
        elif name > node.name:
            if node.right is None:
                node.right = new_node
                return root
            node = node.right
        else:
            return root


def find_node(root: Optional[CategoryNode], name: str) -> Optional[CategoryNode]:
    node = root
    while node is not None:
        if name == node.name:
            return node
        node = node.left if name < node.name else node.right
    return None


def delete_node(root: Optional[CategoryNode], name: str) -> Optional[CategoryNode]:
    """
    Remove the node for name and return the (new) root.

    A node with two children takes over the name and products of its
    in-order successor (leftmost node of the right subtree), and the
    successor node is unlinked instead.
    """
    parent = None
    node = root
    while node is not None and node.name != name:
        parent = node
        node = node.left if name < node.name else node.right

    if node is None:
        return root

    if node.left is not None and node.right is not None:
        successor_parent = node
        successor = node.right
        while successor.left is not None:
            successor_parent = successor
            successor = successor.left

        node.name = successor.name
        node.products = successor.products

        # Successor has no left child
        if successor_parent is node:
            successor_parent.right = successor.right
        else:
            successor_parent.left = successor.right
        return root

    child = node.left if node.left is not None else node.right
    if parent is None:
        return child
    if parent.left is node:
        parent.left = child
    else:
        parent.right = child
    return root


def iter_in_order(root: Optional[CategoryNode]) -> Iterator[CategoryNode]:
    """Yield nodes in ascending name order."""
    stack = []
    node = root
    while stack or node is not None:
        while node is not None:
            stack.append(node)
            node = node.left
        node = stack.pop()
        yield node
        node = node.right


def tree_height(root: Optional[CategoryNode]) -> int:
    if root is None:
        return 0
    height = 0
    level = [root]
    while level:
        height += 1
        level = [child for n in level for child in (n.left, n.right) if child is not None]
    return height


class CategoryIndex:
    """Owns the category tree root so callers never reassign it themselves."""

    def __init__(self):
        self._root: Optional[CategoryNode] = None
        self._size = 0

    @property
    def root(self) -> Optional[CategoryNode]:
        return self._root

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[CategoryNode]:
        return iter_in_order(self._root)

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def insert(self, name: str) -> CategoryInsertOutcome:
        if find_node(self._root, name) is not None:
            logger.info(f"Category '{name}' already exists")
            return CategoryInsertOutcome.ALREADY_EXISTS

        self._root = insert_node(self._root, name)
        self._size += 1
        logger.info(f"Category '{name}' added")
        return CategoryInsertOutcome.INSERTED

    def find(self, name: str) -> Optional[CategoryNode]:
        return find_node(self._root, name)

    def delete(self, name: str) -> CategoryDeleteOutcome:
        node = find_node(self._root, name)
        if node is None:
            logger.warning(f"Category '{name}' not found, nothing deleted")
            return CategoryDeleteOutcome.NOT_FOUND

        discarded = len(node.products)
        self._root = delete_node(self._root, name)
        self._size -= 1
        logger.info(f"Category '{name}' deleted with {discarded} product(s)")
        return CategoryDeleteOutcome.DELETED

    def names(self) -> List[str]:
        return [node.name for node in self]

    def height(self) -> int:
        return tree_height(self._root)

    def find_product(self, product_id: int) -> Optional[Tuple[CategoryNode, Product]]:
        """First category in name order holding product_id, with the product."""
        for node in self:
            product = node.products.find(product_id)
            if product is not None:
                return node, product
        return None

