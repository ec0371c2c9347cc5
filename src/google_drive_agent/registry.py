"""
Function registry for the agent host.

Each entry binds a name to an input schema, an output schema, a
description and a handler. Handlers receive the validated input model and
return a result record (anything with ``to_dict``) or a plain mapping;
coroutine handlers are supported through ``ainvoke``.
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions.registry import (
    RegistrationError, UnknownFunctionError, FunctionInputError, FunctionOutputError
)

logger = logging.getLogger(__name__)

Handler = Callable[[BaseModel], Any]


@dataclass(frozen=True)
class RegisteredFunction:
    """
    A function exposed to the agent host.
    Args:
        name: Name callers use to invoke the function.
        description: What the function does, shown to the agent.
        input_schema: Model validating call arguments.
        output_schema: Model validating the handler's result.
        handler: Callable receiving the validated input model.
    """
    name: str
    description: str
    input_schema: Type[BaseModel]
    output_schema: Type[BaseModel]
    handler: Handler

    def describe(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema.model_json_schema(),
            "outputSchema": self.output_schema.model_json_schema(),
        }


class FunctionRegistry:
    """Maps function names to their schemas and handlers."""

    def __init__(self):
        self._functions: Dict[str, RegisteredFunction] = {}

    def register(
            self,
            name: str,
            handler: Handler,
            description: str,
            input_schema: Type[BaseModel],
            output_schema: Type[BaseModel]
    ) -> RegisteredFunction:
        """
        Adds a function to the registry.

        Raises:
            RegistrationError: If the name is empty or already taken.
        """
        if not name:
            raise RegistrationError("Function name cannot be empty")
        if name in self._functions:
            raise RegistrationError(f"Function already registered: {name}")

        function = RegisteredFunction(
            name=name,
            description=description,
            input_schema=input_schema,
            output_schema=output_schema,
            handler=handler,
        )
        self._functions[name] = function
        logger.debug("Registered function %s", name)
        return function

    def get(self, name: str) -> RegisteredFunction:
        try:
            return self._functions[name]
        except KeyError:
            raise UnknownFunctionError(f"Unknown function: {name}") from None

    def names(self) -> List[str]:
        return list(self._functions)

    def describe(self) -> List[dict]:
        """Lists every registered function with its description and JSON schemas."""
        return [function.describe() for function in self._functions.values()]

    def invoke(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> dict:
        """
        Validates the arguments, calls the handler and validates its result.

        Args:
            name: Registered function name.
            arguments: Raw call arguments.

        Returns:
            The result as a dictionary in the output schema's shape.
        """
        function = self.get(name)
        result = function.handler(self._validate_input(function, arguments))
        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            raise TypeError(f"Function {name} is async; use ainvoke")
        return self._validate_output(function, result)

    async def ainvoke(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> dict:
        """Like invoke, awaiting handlers that return awaitables."""
        function = self.get(name)
        result = function.handler(self._validate_input(function, arguments))
        if inspect.isawaitable(result):
            result = await result
        return self._validate_output(function, result)

    def __contains__(self, name: str) -> bool:
        return name in self._functions

    def __len__(self) -> int:
        return len(self._functions)

    @staticmethod
    def _validate_input(function: RegisteredFunction, arguments: Optional[Mapping[str, Any]]) -> BaseModel:
        try:
            return function.input_schema.model_validate(dict(arguments or {}))
        except PydanticValidationError as e:
            raise FunctionInputError(f"Invalid arguments for {function.name}: {e}") from e

    @staticmethod
    def _validate_output(function: RegisteredFunction, result: Any) -> dict:
        payload = result.to_dict() if hasattr(result, "to_dict") else result
        try:
            validated = function.output_schema.model_validate(payload)
        except PydanticValidationError as e:
            raise FunctionOutputError(f"Invalid result from {function.name}: {e}") from e
        return validated.model_dump(exclude_none=True)
