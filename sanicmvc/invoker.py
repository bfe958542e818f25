"""
Action Invocation
ActionInvoker contract, the per-route ControllerBinding and a reference invoker
"""
import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional
from sanic import Request
from sanic.response import HTTPResponse

from sanicmvc.exceptions.custom import BadRequestException, HttpException, NotFoundException
from sanicmvc.http.request_adapter import RequestAdapter
from sanicmvc.http.response_adapter import ResponseAdapter
from sanicmvc.routing.route_descriptor import RouteDescriptor
from sanicmvc.view.engine import ViewEngine


class ActionInvoker(ABC):
    """
    Creates controllers and runs their actions

    route is None for the catch-all binding: the invoker decides how a
    request no route claimed is answered.
    """

    @abstractmethod
    async def execute(
        self,
        request: RequestAdapter,
        response: ResponseAdapter,
        route: Optional[RouteDescriptor],
    ) -> Optional[HTTPResponse]:
        """
        Returns:
            A finished Sanic response, or None to send what was
            collected on the ResponseAdapter
        """


@dataclass(frozen=True)
class ControllerBinding:
    """
    Request handler for one route (or the catch-all when route is None)

    Created once while composing the router and shared by every request
    for that route; adapters are created per call.
    """
    invoker: ActionInvoker
    route: Optional[RouteDescriptor] = None
    view_engine: Optional[ViewEngine] = None

    async def __call__(self, request: Request) -> HTTPResponse:
        response = ResponseAdapter(self.view_engine)
        result = await self.invoker.execute(RequestAdapter(request), response, self.route)
        if isinstance(result, HTTPResponse):
            return result
        return await response.build()

    def __repr__(self) -> str:
        return f"<ControllerBinding {self.route or 'catch-all'}>"


class ControllerInvoker(ActionInvoker):
    """
    Reference invoker: one controller instance per request

    The controller is built without arguments and receives `request` and
    `response` attributes. Action keyword arguments are bound by name from
    route parameters, then the query string; int/float/bool annotations
    are converted. The action's return value becomes the response body
    unless it is None (use the ResponseAdapter) or an HTTPResponse.
    """

    async def execute(
        self,
        request: RequestAdapter,
        response: ResponseAdapter,
        route: Optional[RouteDescriptor],
    ) -> Optional[HTTPResponse]:
        if route is None:
            raise NotFoundException(f"No route for {request.http_method.value} {request.url}")

        controller = self.create_controller(route, request, response)
        action = getattr(controller, route.action_name, None)
        if not callable(action):
            raise HttpException(f"{route.class_name} has no action '{route.action_name}'")

        result = action(**self.bind_arguments(action, request))
        if inspect.isawaitable(result):
            result = await result

        if result is None or result is response:
            return None
        if isinstance(result, HTTPResponse):
            return result

        response.send(result)
        return None

    def create_controller(self, route: RouteDescriptor, request: RequestAdapter, response: ResponseAdapter) -> Any:
        if route.controller is None:
            raise HttpException(f"Route {route} has no controller type")
        controller = route.controller()
        controller.request = request
        controller.response = response
        return controller

    def bind_arguments(self, action: Any, request: RequestAdapter) -> Dict[str, Any]:
        arguments: Dict[str, Any] = {}
        for name, parameter in inspect.signature(action).parameters.items():
            if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
                continue

            value = request.get_param(name)
            if value is None:
                value = request.get_query(name)

            if value is None:
                if parameter.default is parameter.empty:
                    arguments[name] = None
                continue

            arguments[name] = self._convert(name, value, parameter.annotation)
        return arguments

    @staticmethod
    def _convert(name: str, value: str, annotation: Any) -> Any:
        if annotation is bool:
            return value.lower() in ('1', 'true', 'yes', 'on')
        if annotation in (int, float):
            try:
                return annotation(value)
            except ValueError:
                raise BadRequestException(f"Parameter '{name}' must be {annotation.__name__}") from None
        return value
