"""Attribute access over lxml elements.

Absence is always reported as None; none of these helpers raise.
"""

from lxml import etree


def read_attribute(*, element: etree._Element, name: str) -> str | None:
    """Named attribute of `element`, or None if absent."""
    return element.get(name)


def find_child(*, element: etree._Element, tag: str) -> etree._Element | None:
    """First direct child with this tag, or None."""
    return element.find(tag)


def read_child_attribute(*, element: etree._Element, child_tag: str, name: str) -> str | None:
    """Attribute `name` of the first `child_tag` child.

    Returns None both when the child is missing and when the child lacks
    the attribute; use find_child() first where the two cases differ.
    """
    child = find_child(element=element, tag=child_tag)
    if child is None:
        return None
    return child.get(name)
