"""UI controllers package for OrgTree Toolkit.

Controllers mediate between view widgets and the core services; they hold
transient view state and contain no UI toolkit code.
"""

from .orgchart_controller import NodeForm, OperationResult, OrgChartController

__all__: list[str] = ["NodeForm", "OperationResult", "OrgChartController"]
