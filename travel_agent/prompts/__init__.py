from .templates import PromptTemplates

__all__ = ["PromptTemplates"]
