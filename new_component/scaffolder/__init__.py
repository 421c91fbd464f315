"""Component scaffolder -- turns a component name into source files.

Quick usage::

    from new_component.scaffolder import ComponentGenerator, ComponentRequest

    generator = ComponentGenerator(formatter=format_fn)
    await generator.materialize(ComponentRequest(name="Button", lang="ts"))
"""

from new_component.scaffolder.generator import (
    ComponentGenerator,
    ComponentRequest,
    OutputPlan,
    plan_output,
    require_component_name,
)
from new_component.scaffolder.templates import TemplateRenderer

__all__ = [
    "ComponentGenerator",
    "ComponentRequest",
    "OutputPlan",
    "TemplateRenderer",
    "plan_output",
    "require_component_name",
]
