from cockpit.models.changelog import ChangeLogEntry, ChangeLogProvider
from cockpit.models.checklist import ChecklistItem
from cockpit.models.project import CodingPlatform, Project, ProjectStatus

__all__ = [
    "Project",
    "ProjectStatus",
    "CodingPlatform",
    "ChecklistItem",
    "ChangeLogEntry",
    "ChangeLogProvider",
]
