"""
Validation message types.

Messages are attached to the JSON field that caused them so the form can
highlight that field; ``ValidationResult.to_dict`` groups them by
severity and adds a per-field summary.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
from enum import Enum


class Severity(Enum):
    """Message severity levels, most severe first."""
    ERROR = "error"      # Blocks optimization
    WARNING = "warning"  # Optimization allowed, result may be poor
    INFO = "info"        # Automatic correction or note


_SEVERITY_RANK = {Severity.ERROR: 0, Severity.WARNING: 1, Severity.INFO: 2}


@dataclass
class ValidationMessage:
    """One finding about a parameter set.

    Attributes:
        severity: Message severity level
        code: ErrorCode / WarningCode value
        message: Text shown to the user
        field: JSON field name, e.g. 'diffuserTolerance'
        suggestion: How to fix it
    """
    severity: Severity
    code: str
    message: str
    field: Optional[str] = None
    suggestion: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'severity': self.severity.value,
            'code': self.code,
            'message': self.message,
        }
        if self.field:
            data['field'] = self.field
        if self.suggestion:
            data['suggestion'] = self.suggestion
        return data


@dataclass
class ValidationResult:
    """All findings for one parameter set.

    ``is_valid`` turns False with the first error; warnings and infos
    never affect it.
    """
    is_valid: bool = True
    messages: List[ValidationMessage] = field(default_factory=list)

    def _with_severity(self, severity: Severity) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == severity]

    @property
    def errors(self) -> List[ValidationMessage]:
        return self._with_severity(Severity.ERROR)

    @property
    def warnings(self) -> List[ValidationMessage]:
        return self._with_severity(Severity.WARNING)

    @property
    def infos(self) -> List[ValidationMessage]:
        return self._with_severity(Severity.INFO)

    def _add(self, message: ValidationMessage) -> None:
        self.messages.append(message)
        if message.severity == Severity.ERROR:
            self.is_valid = False

    def add_error(self, code: str, message: str, field: Optional[str] = None,
                  suggestion: Optional[str] = None) -> None:
        self._add(ValidationMessage(Severity.ERROR, code, message, field, suggestion))

    def add_warning(self, code: str, message: str, field: Optional[str] = None,
                    suggestion: Optional[str] = None) -> None:
        self._add(ValidationMessage(Severity.WARNING, code, message, field, suggestion))

    def add_info(self, code: str, message: str, field: Optional[str] = None) -> None:
        self._add(ValidationMessage(Severity.INFO, code, message, field))

    def field_severities(self) -> Dict[str, str]:
        """Most severe level reported for each field, for highlighting inputs."""
        worst: Dict[str, Severity] = {}
        for m in self.messages:
            if not m.field:
                continue
            current = worst.get(m.field)
            if current is None or _SEVERITY_RANK[m.severity] < _SEVERITY_RANK[current]:
                worst[m.field] = m.severity
        return {name: severity.value for name, severity in worst.items()}

    def to_dict(self) -> Dict[str, Any]:
        return {
            'is_valid': self.is_valid,
            'errors': [m.to_dict() for m in self.errors],
            'warnings': [m.to_dict() for m in self.warnings],
            'infos': [m.to_dict() for m in self.infos],
            'fields': self.field_severities(),
        }

    def __bool__(self) -> bool:
        return self.is_valid
