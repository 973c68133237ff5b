from enum import Enum


class TemplateId(str, Enum):
    """Шаблоны печатных форм"""
    KAZAKH_ACT = "kazakh-act"
