from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

MULTIMODAL_SUFFIX = " (Multimodal)"


@dataclass(frozen=True)
class ModelInfo:
    id: str
    label: str
    multimodal: bool


# Models that accept image_url parts.
MULTIMODAL_MODELS: frozenset[str] = frozenset({
    "gpt-4.1",
    "gpt-4.1-mini",
    "gpt-4.1-nano",
    "openai-roblox",
    "mistral-small-3.1-24B",
    "unity-mistral-large",
    "mirexa",
    "searchgpt",
    "phi-4",
    "sur",
    "bidara",
    "pixtral-12b-2409",
    "pixtral-large-2411",
})

TEXT_ONLY_MODELS: tuple[str, ...] = (
    "deepseek-r1",
    "deepseek-v3",
    "qwen2.5-coder-32b-instruct",
    "llama-3.3-70b-instruct",
    "mistral-large-2411",
    "codestral-2501",
)


def _build_catalog() -> Mapping[str, ModelInfo]:
    catalog: dict[str, ModelInfo] = {}
    for model_id in sorted(MULTIMODAL_MODELS):
        catalog[model_id] = ModelInfo(model_id, f"{model_id}{MULTIMODAL_SUFFIX}", True)
    for model_id in TEXT_ONLY_MODELS:
        catalog[model_id] = ModelInfo(model_id, model_id, False)
    return MappingProxyType(catalog)


MODEL_CATALOG: Mapping[str, ModelInfo] = _build_catalog()


def is_known_model(model_id: str) -> bool:
    return model_id in MODEL_CATALOG


def is_multimodal(model_id: str) -> bool:
    return model_id in MULTIMODAL_MODELS


def display_name(model_id: str) -> str:
    """Picker label with the multimodal marker removed; unknown ids pass through."""
    info = MODEL_CATALOG.get(model_id)
    if info is None:
        return model_id
    return info.label.replace(MULTIMODAL_SUFFIX, "")


def model_info_text(model_id: str) -> str:
    return f"Current model: {display_name(model_id)}"


def list_models() -> list[ModelInfo]:
    return list(MODEL_CATALOG.values())
