"""
Validation of the free-text "materiales usados" list on repairs.

The text is a comma separated list of `<material> <quantity> [unit]`
entries, e.g. `yeso 1/2 kg, pincel 2, resina 0.5 litro`. Tools and other
countable items (pincel, brocha, lija, ...) only accept whole numbers.
"""

from __future__ import annotations

import re
from fractions import Fraction
from typing import Dict, List, Optional

WHOLE_UNIT_MATERIALS = (
    "pincel",
    "brocha",
    "lija",
    "espátula",
    "clavo",
    "tornillo",
    "destornillador",
    "martillo",
    "taladro",
    "sierra",
    "cutter",
    "rodillo",
    "guante",
    "mascarilla",
    "lente",
)

_FRACTION_RE = re.compile(r"\b\d+/\d+\b")
_NUMBER_RE = re.compile(r"\b\d+\.?\d*\b")
_UNIT_RE = re.compile(r"\b(litro|kg|kilo|gramo|metro|cm|mm|ml|centimetro)\b")
_SPACES_RE = re.compile(r"\s+")

DEFAULT_MATERIAL_NAME = "material varios"


class MaterialFormatError(ValueError):
    pass


def is_whole_unit(text: str) -> bool:
    return any(material in text for material in WHOLE_UNIT_MATERIALS)


def material_name(text: str) -> str:
    nombre = _FRACTION_RE.sub("", text)
    nombre = _NUMBER_RE.sub("", nombre)
    nombre = _UNIT_RE.sub("", nombre)
    nombre = _SPACES_RE.sub(" ", nombre).strip()
    return nombre or DEFAULT_MATERIAL_NAME


def parse_entry(entry: str) -> Dict[str, object]:
    """
    Parse one `<material> <quantity>` entry.

    Returns `{"nombre_material", "cantidad", "tipo", "es_entero"}`;
    `cantidad` and `tipo` are missing when the entry has no number.
    An empty entry yields an empty dict.
    """
    text = (entry or "").strip().lower()
    if not text:
        return {}

    whole_only = is_whole_unit(text)
    result: Dict[str, object] = {}
    try:
        fraction = _FRACTION_RE.search(text)
        if fraction:
            if whole_only:
                raise MaterialFormatError(
                    f"Material '{material_name(text)}' no acepta fracciones. Use números enteros."
                )
            numerator, denominator = (int(part) for part in fraction.group().split("/"))
            if denominator == 0:
                raise MaterialFormatError("Denominador no puede ser cero")
            result.update(cantidad=float(Fraction(numerator, denominator)), tipo="fraccion", es_entero=False)
        else:
            number = _NUMBER_RE.search(text)
            if number:
                cantidad = float(number.group())
                if whole_only and not cantidad.is_integer():
                    raise MaterialFormatError(
                        f"Material '{material_name(text)}' requiere cantidad entera. No use decimales."
                    )
                result.update(
                    cantidad=cantidad,
                    tipo="entero" if cantidad.is_integer() else "decimal",
                    es_entero=whole_only,
                )
    except MaterialFormatError:
        raise
    except ValueError:
        raise MaterialFormatError("Formato inválido. Use números o fracciones válidas")

    result["nombre_material"] = material_name(text)
    return result


def validate_materials_used(text: Optional[str]) -> List[Dict[str, object]]:
    """
    Validate every entry of a materials list.

    Raises MaterialFormatError with `Error en material '<entry>': <reason>`
    on the first bad entry.
    """
    if not text or not text.strip():
        return []
    parsed = []
    for entry in text.split(","):
        entry = entry.strip()
        try:
            result = parse_entry(entry)
        except MaterialFormatError as exc:
            raise MaterialFormatError(f"Error en material '{entry}': {exc}") from exc
        if result:
            parsed.append(result)
    return parsed
