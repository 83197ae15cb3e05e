"""Service layer exports."""

from .errors import LoadoutError
from .knowledge_tracker import KnowledgeTracker
from .metrics_system import MetricsUpdate, check_end_conditions, initialize_metrics, update_metrics
from .notifications import Notification, build_notification
from .rescue_evaluator import RescueStatus, calculate_rescue_status
from .scenario_generator import ScenarioGenerator

__all__ = [
    "LoadoutError",
    "KnowledgeTracker",
    "check_end_conditions",
    "initialize_metrics",
    "MetricsUpdate",
    "update_metrics",
    "Notification",
    "build_notification",
    "RescueStatus",
    "calculate_rescue_status",
    "ScenarioGenerator",
]
