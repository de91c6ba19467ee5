"""
Boolean parameter detector.

A boolean default lets the caller pick which execution path the method
takes. The parameter is a control couple.

Only parameters with a literal true/false default are detected.
"""
from typing import List

from . import BaseDetector, register
from ..context import CodeContext
from ..warnings import SmellWarning


@register
class BooleanParameter(BaseDetector):

    def sniff(self, context: CodeContext) -> List[SmellWarning]:
        return [
            self.smell_warning(
                context=context,
                lines=[context.declaration_line],
                message=f"has boolean parameter '{parameter}'",
                parameters={"parameter": parameter},
            )
            for parameter, value in context.default_assignments.items()
            if value.is_boolean_literal
        ]
