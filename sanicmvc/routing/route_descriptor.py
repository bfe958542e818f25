"""
Route Descriptor
One controller action's verb and path binding, as produced by route discovery
"""
from dataclasses import dataclass, field
from typing import Optional


def join_paths(*parts: str) -> str:
    """Join URL path fragments into '/a/b' form ('/' when all are empty)"""
    segments = [part.strip('/') for part in parts if part and part.strip('/')]
    return '/' + '/'.join(segments)


@dataclass(frozen=True)
class RouteDescriptor:
    """
    Usage:
        RouteDescriptor(
            class_name='UserController',
            class_path='/users',
            http_method='GET',
            method_path='/:id',
            action_name='show',
            controller=UserController,
        )

    `route` is the route name matched against the default page option;
    it defaults to the joined class and method paths ('/users/:id').
    """
    class_name: str
    class_path: str
    http_method: str
    method_path: str
    action_name: str
    controller: Optional[type] = field(default=None, compare=False)
    route: str = ''

    def __post_init__(self):
        if not self.route:
            object.__setattr__(self, 'route', join_paths(self.class_path, self.method_path))

    def __str__(self) -> str:
        return f"{self.http_method.upper()} {self.route} -> {self.class_name}.{self.action_name}"
