"""Interfaces of the elm/core modules and Elm's implicit default imports."""

from __future__ import annotations

from dataclasses import dataclass, field

from simplify.ast_nodes import ExposedItem, Exposing, Import
from simplify.source import EMPTY_RANGE


@dataclass(frozen=True)
class ModuleInterface:
    """What a module exposes: values, operators and custom types."""

    name: tuple[str, ...]
    values: frozenset[str]
    types: dict[str, tuple[str, ...]] = field(default_factory=dict)
    operators: frozenset[str] = frozenset()

    def constructors(self) -> frozenset[str]:
        return frozenset(c for ctors in self.types.values() for c in ctors)

    def exposes_value(self, name: str) -> bool:
        return name in self.values or name in self.operators or name in self.constructors()


def _interface(name: str, values: str, types: dict[str, tuple[str, ...]] | None = None,
               operators: str = "") -> ModuleInterface:
    return ModuleInterface(
        tuple(name.split('.')),
        frozenset(values.split()),
        types or {},
        frozenset(operators.split()),
    )


_CORE: list[ModuleInterface] = [
    _interface(
        "Basics",
        """toFloat round floor ceiling truncate max min compare not xor modBy
        remainderBy negate abs clamp sqrt logBase e pi cos sin tan acos asin
        atan atan2 degrees radians turns toPolar fromPolar isNaN isInfinite
        identity always never""",
        {"Int": (), "Float": (), "Bool": ("True", "False"),
         "Order": ("LT", "EQ", "GT"), "Never": ()},
        "+ - * / // ^ == /= < > <= >= && || ++ <| |> << >>",
    ),
    _interface(
        "List",
        """singleton repeat range map indexedMap foldl foldr filter filterMap
        length reverse member all any maximum minimum sum product append
        concat concatMap intersperse map2 map3 map4 map5 sort sortBy sortWith
        isEmpty head tail take drop partition unzip""",
        {"List": ()},
        "::",
    ),
    _interface(
        "Maybe",
        "withDefault map map2 map3 map4 map5 andThen",
        {"Maybe": ("Just", "Nothing")},
    ),
    _interface(
        "Result",
        "map map2 map3 map4 map5 andThen withDefault toMaybe fromMaybe mapError",
        {"Result": ("Ok", "Err")},
    ),
    _interface(
        "String",
        """isEmpty length reverse repeat replace append concat split join words
        lines slice left right dropLeft dropRight contains startsWith endsWith
        indexes indices toInt fromInt toFloat fromFloat fromChar cons uncons
        toList fromList toUpper toLower pad padLeft padRight trim trimLeft
        trimRight map filter foldl foldr any all""",
        {"String": ()},
    ),
    _interface(
        "Char",
        """toUpper toLower toLocaleUpper toLocaleLower isUpper isLower isAlpha
        isAlphaNum isDigit isOctDigit isHexDigit toCode fromCode""",
        {"Char": ()},
    ),
    _interface("Tuple", "pair first second mapFirst mapSecond mapBoth"),
    _interface("Debug", "toString log todo"),
    _interface(
        "Dict",
        """empty singleton insert update remove isEmpty member get size keys
        values toList fromList map foldl foldr filter partition union
        intersect diff merge""",
        {"Dict": ()},
    ),
    _interface(
        "Set",
        """empty singleton insert remove isEmpty member size union intersect
        diff toList fromList map foldl foldr filter partition""",
        {"Set": ()},
    ),
    _interface(
        "Array",
        """empty initialize repeat fromList isEmpty length get set push append
        slice toList toIndexedList map indexedMap foldl foldr filter""",
        {"Array": ()},
    ),
    _interface(
        "Platform",
        "worker sendToApp sendToSelf",
        {"Program": (), "Task": (), "ProcessId": (), "Router": ()},
    ),
    _interface("Platform.Cmd", "none batch map", {"Cmd": ()}),
    _interface("Platform.Sub", "none batch map", {"Sub": ()}),
    _interface(
        "Task",
        """succeed fail map map2 map3 map4 map5 andThen sequence onError
        mapError perform attempt""",
        {"Task": ()},
    ),
]

CORE_MODULES: dict[tuple[str, ...], ModuleInterface] = {m.name: m for m in _CORE}


def load_interface(module_name: tuple[str, ...]) -> ModuleInterface | None:
    """Look up a known elm/core module; None for anything else."""
    return CORE_MODULES.get(module_name)


def _exposing(*items: str, everything: bool = False) -> Exposing:
    exposed = [
        ExposedItem(item.removesuffix("(..)"), item.endswith("(..)"), EMPTY_RANGE)
        for item in items
    ]
    return Exposing(everything, exposed, EMPTY_RANGE)


def _import(name: str, alias: str | None = None, exposing: Exposing | None = None) -> Import:
    return Import(tuple(name.split('.')), alias, exposing, EMPTY_RANGE)


# Every Elm module implicitly starts with these imports.
DEFAULT_IMPORTS: list[Import] = [
    _import("Basics", exposing=_exposing(everything=True)),
    _import("List", exposing=_exposing("List", "::")),
    _import("Maybe", exposing=_exposing("Maybe(..)")),
    _import("Result", exposing=_exposing("Result(..)")),
    _import("String", exposing=_exposing("String")),
    _import("Char", exposing=_exposing("Char")),
    _import("Tuple"),
    _import("Debug"),
    _import("Platform", exposing=_exposing("Program")),
    _import("Platform.Cmd", alias="Cmd", exposing=_exposing("Cmd")),
    _import("Platform.Sub", alias="Sub", exposing=_exposing("Sub")),
]
