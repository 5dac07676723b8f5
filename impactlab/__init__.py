from .errors import InvalidArgument
from .population import ImpactLocation, PopulationEstimator
from .report import ImpactReport, ImpactReportGenerator, generate_report, simulate
from .scaling_laws import ImpactParameters, PhysicalOutputs, compute_physical_outputs

__all__ = [
    "InvalidArgument",
    "ImpactLocation",
    "PopulationEstimator",
    "ImpactReport",
    "ImpactReportGenerator",
    "generate_report",
    "simulate",
    "ImpactParameters",
    "PhysicalOutputs",
    "compute_physical_outputs",
]
