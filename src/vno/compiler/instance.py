"""Generate runtime instantiation code for compiled components."""

from __future__ import annotations

from .errors import CompilerError
from .models import ComponentRecord, InstanceKind

__all__ = ["render_instance"]

_FORMS: dict[InstanceKind, str] = {
    InstanceKind.ROOT: (
        "\nconst {label} = new {runtime}({{template: `{template}`,{script}}})"
    ),
    InstanceKind.NAMED: (
        "\nconst {label} = {runtime}.component("
        '"{label}", {{template: `{template}`,{script}}})'
    ),
}


def render_instance(record: ComponentRecord, *, runtime: str = "Vue") -> str:
    """Return the bundle fragment instantiating ``record``.

    The root record becomes a runtime instance; every other record is
    registered as a named component.

    Example:
        >>> from pathlib import Path
        >>> record = ComponentRecord(
        ...     "Nav", Path("/app/Nav.vue"), template="<nav></nav>",
        ...     script="name:'nav'", extracted=True,
        ... )
        >>> render_instance(record)
        '\\nconst Nav = Vue.component("Nav", {template: `<nav></nav>`,name:\\'nav\\'})'

    Raises:
        CompilerError: If the record's sections have not been extracted.
    """

    if not record.extracted:
        raise CompilerError(
            "Component sections must be extracted before instantiation",
            label=record.label,
            path=record.path,
        )

    return _FORMS[record.kind].format(
        label=record.label,
        runtime=runtime,
        template=record.template or "",
        script=record.script or "",
    )
