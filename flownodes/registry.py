"""Registry of node model factories and type converters."""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Mapping, Optional

from flownodes.model import NodeDataModel
from flownodes.ports import NodeDataType, TypeConverter

ModelCreator = Callable[[], NodeDataModel]


class DataModelRegistry:
    """Maps model names to factories and categories, and type pairs to converters.

    A model's registration name is taken from ``creator.static_name()`` when
    the creator provides one, otherwise from ``creator().name()``.
    """

    def __init__(self) -> None:
        self._creators: dict[str, ModelCreator] = {}
        self._categories_by_model: dict[str, str] = {}
        self._categories: set[str] = set()
        self._converters: dict[tuple[str, str], TypeConverter] = {}

    def register_model(self, creator: ModelCreator, category: str = "Nodes") -> None:
        """Register a factory; a name that is already registered is kept as is."""
        static_name = getattr(creator, "static_name", None)
        name = static_name() if callable(static_name) else creator().name()
        if name in self._creators:
            return
        self._creators[name] = creator
        self._categories.add(category)
        self._categories_by_model[name] = category

    def register_type_converter(
        self, type_in: NodeDataType, type_out: NodeDataType, converter: TypeConverter
    ) -> None:
        self._converters[(type_in.id, type_out.id)] = converter

    def create(self, model_name: str) -> Optional[NodeDataModel]:
        """Build a new model, or return None if the name is not registered."""
        creator = self._creators.get(model_name)
        return creator() if creator is not None else None

    def registered_model_creators(self) -> Mapping[str, ModelCreator]:
        return MappingProxyType(self._creators)

    def registered_models_category_association(self) -> Mapping[str, str]:
        return MappingProxyType(self._categories_by_model)

    def categories(self) -> list[str]:
        """Category names in sorted order."""
        return sorted(self._categories)

    def get_type_converter(self, d1: NodeDataType, d2: NodeDataType) -> Optional[TypeConverter]:
        """Converter from ``d1`` to ``d2``, matched by type id, or None."""
        return self._converters.get((d1.id, d2.id))