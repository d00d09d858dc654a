# educacenso/services/data_validation/required_fields_validator.py
"""
Required-field checks for the census entities.

Each rule names the field as the upstream application does (``birthDate``,
``inepCode``) and, where it differs, the attribute path on the model.
"""

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence


@dataclass(frozen=True)
class RequiredField:
    field: str
    message: str
    attribute: Optional[str] = None

    @property
    def path(self) -> str:
        return self.attribute or self.field


@dataclass
class FieldError:
    field: str
    message: str


@dataclass
class RequiredFieldsResult:
    valid: bool
    errors: List[FieldError] = field(default_factory=list)
    missing_fields: List[str] = field(default_factory=list)


STUDENT_REQUIRED_FIELDS = [
    RequiredField("name", "Nome do aluno é obrigatório"),
    RequiredField("birthDate", "Data de nascimento é obrigatória", "birth_date"),
    RequiredField("guardian", "Nome do responsável é obrigatório"),
    RequiredField("registration", "Número de matrícula é obrigatório"),
    RequiredField("street", "Rua é obrigatória", "address.street"),
    RequiredField("number", "Número do endereço é obrigatório", "address.number"),
    RequiredField("neighborhood", "Bairro é obrigatório", "address.neighborhood"),
    RequiredField("city", "Cidade é obrigatória", "address.city"),
    RequiredField("state", "Estado é obrigatório", "address.state"),
]

TEACHER_REQUIRED_FIELDS = [
    RequiredField("name", "Nome do professor é obrigatório"),
    RequiredField("email", "E-mail é obrigatório"),
    RequiredField("phone", "Telefone é obrigatório"),
    RequiredField("subject", "Disciplina é obrigatória"),
    RequiredField("role", "Cargo/Função é obrigatório"),
    RequiredField("admissionDate", "Data de admissão é obrigatória", "admission_date"),
]

SCHOOL_REQUIRED_FIELDS = [
    RequiredField("name", "Nome da escola é obrigatório"),
    RequiredField("code", "Código da escola é obrigatório"),
    RequiredField("inepCode", "Código INEP é obrigatório", "inep_code"),
    RequiredField("director", "Nome do diretor é obrigatório"),
    RequiredField("address", "Endereço é obrigatório"),
    RequiredField("phone", "Telefone é obrigatório"),
    RequiredField(
        "administrativeDependency",
        "Dependência administrativa é obrigatória",
        "administrative_dependency",
    ),
    RequiredField(
        "locationType", "Localização (Urbana/Rural) é obrigatória", "location_type"
    ),
]

CLASSROOM_REQUIRED_FIELDS = [
    RequiredField("name", "Nome da turma é obrigatório"),
    RequiredField("shift", "Turno é obrigatório"),
    RequiredField(
        "etapaEnsinoId", "Etapa de Ensino é obrigatória", "curriculum_stage_id"
    ),
    RequiredField(
        "serieAnoId",
        "Série/Ano é obrigatória (exceto multissérie)",
        "grade_level_id",
    ),
    RequiredField("schoolId", "Escola é obrigatória", "school_id"),
    RequiredField("yearId", "Ano letivo é obrigatório", "year_id"),
]

CURRICULUM_STAGE_REQUIRED_FIELDS = [
    RequiredField("name", "Nome da etapa de ensino é obrigatório"),
    RequiredField("codigoCenso", "Código do Censo Escolar é obrigatório", "census_code"),
]


def _resolve(entity: Any, path: str) -> Any:
    value = entity
    for part in path.split("."):
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


def is_missing(value: Any) -> bool:
    """None, empty and whitespace-only values count as missing."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def validate_required_fields(
    entity: Any, rules: Sequence[RequiredField]
) -> RequiredFieldsResult:
    """Check ``rules`` against a model or a plain mapping."""
    result = RequiredFieldsResult(valid=True)
    for rule in rules:
        value = _resolve(entity, rule.path)
        if value is None and isinstance(entity, Mapping):
            value = entity.get(rule.field)
        if is_missing(value):
            result.errors.append(FieldError(field=rule.field, message=rule.message))
            result.missing_fields.append(rule.field)
    result.valid = not result.errors
    return result


def validate_student_required_fields(student: Any) -> RequiredFieldsResult:
    return validate_required_fields(student, STUDENT_REQUIRED_FIELDS)


def validate_teacher_required_fields(teacher: Any) -> RequiredFieldsResult:
    return validate_required_fields(teacher, TEACHER_REQUIRED_FIELDS)


def validate_school_required_fields(school: Any) -> RequiredFieldsResult:
    return validate_required_fields(school, SCHOOL_REQUIRED_FIELDS)


def validate_classroom_required_fields(
    classroom: Any, is_multi_grade: bool = False
) -> RequiredFieldsResult:
    """The grade level is optional for multi-grade classes (multissérie)."""
    rules = [
        rule
        for rule in CLASSROOM_REQUIRED_FIELDS
        if not (is_multi_grade and rule.field == "serieAnoId")
    ]
    return validate_required_fields(classroom, rules)


def validate_curriculum_stage_required_fields(stage: Any) -> RequiredFieldsResult:
    return validate_required_fields(stage, CURRICULUM_STAGE_REQUIRED_FIELDS)
