#!/usr/bin/env python3
"""Namespace-agnostic lookups on lxml elements.

CAMT.053 documents come with a handful of namespace versions
(camt.053.001.02, .04, .08, ...), so every lookup here matches on the local
name of a tag only.
"""

from __future__ import annotations

from collections.abc import Iterator

from lxml import etree

from camt53_flatten.errors import StructureError


def local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def is_tag(element: etree._Element, name: str) -> bool:
    return local_name(element) == name


def children(element: etree._Element) -> Iterator[etree._Element]:
    """Direct element children in document order, skipping comments and PIs."""
    return element.iterchildren(etree.Element)


def find_child(element: etree._Element, name: str) -> etree._Element | None:
    for child in children(element):
        if is_tag(child, name):
            return child
    return None


def find_path(element: etree._Element, *names: str) -> etree._Element | None:
    current: etree._Element | None = element
    for name in names:
        if current is None:
            return None
        current = find_child(current, name)
    return current


def require_child(element: etree._Element, name: str, message: str) -> etree._Element:
    child = find_child(element, name)
    if child is None:
        raise StructureError(message)
    return child


def require_path(element: etree._Element, *names: str, message: str) -> etree._Element:
    found = find_path(element, *names)
    if found is None:
        raise StructureError(message)
    return found


def text_of(element: etree._Element) -> str:
    """Concatenated text nodes directly under `element`, untouched."""
    return "".join(element.xpath("text()"))
