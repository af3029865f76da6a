"""Recording resource and provider shared by the test suite."""

from typing import ClassVar

from provisor.providers import Provider
from provisor.resources import Resource

# names of record resources in the order their actions ran
CONVERGED: list[str] = []


class RecordResource(Resource):
    """A resource whose convergence is only recorded, never applied."""

    resource_type: ClassVar[str] = "record"
    default_action: ClassVar[str] = "apply"
    allowed_actions: ClassVar[tuple[str, ...]] = ("apply", "fail", "reset")

    changes: bool = False


class RecordProvider(Provider):
    """Appends to CONVERGED; ``changes=True`` marks the resource updated."""

    def load_current_resource(self):
        pass

    def action_apply(self):
        CONVERGED.append(self.new_resource.name)
        if self.new_resource.changes:
            self.new_resource.set_updated_by_last_action(True)

    def action_fail(self):
        CONVERGED.append(self.new_resource.name)
        raise RuntimeError(f"{self.new_resource.name} exploded")

    def action_reset(self):
        CONVERGED.append(f"reset:{self.new_resource.name}")
        self.new_resource.set_updated_by_last_action(True)


RecordProvider.provides("record")
