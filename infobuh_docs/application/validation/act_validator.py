"""
Валидация входных данных акта выполненных работ
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from ...domain.entities.act import ActInput
from ...shared.exceptions.base_exceptions import ValidationError

# Сообщения для встроенных ошибок pydantic
_MESSAGES = {
    "missing": "Обязательное поле",
    "model_type": "Ожидается объект",
    "model_attributes_type": "Ожидается объект",
    "dict_type": "Ожидается объект",
    "list_type": "Ожидается список",
    "tuple_type": "Ожидается список",
    "string_type": "Ожидается строка",
}

ROOT_FIELD = "body"


class FieldError(BaseModel):
    """Ошибка валидации одного поля"""
    field: str = Field(..., description="Путь к полю, например items.0.quantity")
    code: str = Field(..., description="Код ошибки")
    message: str = Field(..., description="Сообщение для пользователя")

    def to_dict(self) -> Dict[str, str]:
        return self.model_dump()


class ValidationResult(BaseModel):
    """Результат валидации: либо ActInput, либо список ошибок"""
    value: Optional[ActInput] = None
    errors: List[FieldError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.errors

    def unwrap(self) -> ActInput:
        """Возвращает ActInput или бросает ValidationError со всеми ошибками"""
        if not self.ok:
            raise ValidationError(self.errors)
        return self.value


def _field_path(loc: tuple) -> str:
    if not loc:
        return ROOT_FIELD
    return ".".join(str(part) for part in loc)


def _to_field_errors(exc: PydanticValidationError) -> List[FieldError]:
    errors = []
    for error in exc.errors():
        code = error["type"]
        errors.append(FieldError(
            field=_field_path(error["loc"]),
            code=code,
            message=_MESSAGES.get(code, error["msg"]),
        ))
    return errors


def validate_act_input(raw_input: Any) -> ValidationResult:
    """
    Проверяет запрос на формирование акта.

    Не бросает исключений: все ошибки по полям возвращаются сразу,
    чтобы клиент мог показать их одним списком.
    """
    try:
        value = ActInput.model_validate(raw_input)
    except PydanticValidationError as e:
        return ValidationResult(errors=_to_field_errors(e))
    return ValidationResult(value=value)
