"""
Route Grouper
Partitions route descriptors by owning controller class
"""
from typing import Dict, Iterable, List

from sanicmvc.routing.route_descriptor import RouteDescriptor


def group_routes(descriptors: Iterable[RouteDescriptor]) -> Dict[str, List[RouteDescriptor]]:
    """
    Group descriptors by exact class name

    Classes appear in first-seen order and each group keeps the
    descriptors' original relative order. Concatenating the groups gives
    back every input descriptor exactly once.
    """
    groups: Dict[str, List[RouteDescriptor]] = {}
    for descriptor in descriptors:
        groups.setdefault(descriptor.class_name, []).append(descriptor)
    return groups
