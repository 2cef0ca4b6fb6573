# ABOUTME: ActionDescriptor and InvocationContext models passed to middleware handlers
# ABOUTME: Identify the intercepted action and carry the stage-dependent payload

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .stage import MiddlewareStage


class ActionDescriptor(BaseModel):
    """
    Identity of an intercepted action.

    Built once per execute_action call from the action context and action
    name, then shared by every stage of that call.
    """

    action: str = Field(description="Action path in '<context>/<name>' form")
    model: str = Field(description="String form of the action context")
    type: str = Field(description="Action type in '<context>.<name>' form, matched by filters")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_action(cls, action_context: Any, action_name: Any) -> "ActionDescriptor":
        """
        Build the descriptor for an action.

        Args:
            action_context: Object or namespace the action belongs to. Any value;
                its string form becomes the model name.
            action_name: Name of the action inside that context.

        Returns:
            ActionDescriptor: The shared descriptor for every stage of the call.
        """
        return cls(
            action=f"{action_context}/{action_name}",
            model=str(action_context),
            type=f"{action_context}.{action_name}",
        )

    def to_context(self, payload: Any, pos: MiddlewareStage) -> "InvocationContext":
        """Create the invocation context for one stage of the pipeline."""
        return InvocationContext(action=self.action, model=self.model, type=self.type, payload=payload, pos=pos)


class InvocationContext(ActionDescriptor):
    """
    Context handed to every middleware handler.

    The payload depends on the stage: the argument list before the action
    runs, the action result during the after stage, and the raised error
    during the error stage. Contexts are immutable; the stage queue derives
    a fresh one for every handler with `with_payload`.
    """

    payload: Any = Field(default=None, description="Stage-dependent payload")
    pos: MiddlewareStage = Field(description="Stage currently running")

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def with_payload(self, payload: Any) -> "InvocationContext":
        """
        Derive a context carrying a new payload.

        Args:
            payload: Value returned by the previous handler.

        Returns:
            InvocationContext: A copy of this context with the payload replaced.
        """
        return self.model_copy(update={"payload": payload})

    @property
    def descriptor(self) -> ActionDescriptor:
        return ActionDescriptor(action=self.action, model=self.model, type=self.type)
