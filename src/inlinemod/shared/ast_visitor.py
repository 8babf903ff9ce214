"""
Syntax Tree Visitor

Mutable pre-order walk over items, the same shape as syn's VisitMut:
- visit_file -> visit_item for each top-level item, in document order
- visit_item dispatches module items to visit_item_mod
- the default visit_item_mod descends into inline module bodies

Subclasses override visit_item_mod and call back into visit_item for the
children they want walked.
"""

from .nodes import AnyItem, ItemMod, SourceFile


class MutVisitor:
    """
    Base class for passes that rewrite module items in place.

    Usage:
        class Renamer(MutVisitor):
            def visit_item_mod(self, node):
                node.name = node.name.upper()
                super().visit_item_mod(node)
    """

    def visit_file(self, node: SourceFile) -> None:
        for item in node.items:
            self.visit_item(item)

    def visit_item(self, node: AnyItem) -> None:
        if isinstance(node, ItemMod):
            self.visit_item_mod(node)

    def visit_item_mod(self, node: ItemMod) -> None:
        if node.content is not None:
            for item in node.content:
                self.visit_item(item)
