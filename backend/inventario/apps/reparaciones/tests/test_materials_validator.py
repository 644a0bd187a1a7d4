from __future__ import annotations

import pytest

from inventario.apps.reparaciones import validator


def test_fraction_entry():
    parsed = validator.parse_entry("Yeso 1/2 kg")
    assert parsed == {
        "cantidad": 0.5,
        "tipo": "fraccion",
        "es_entero": False,
        "nombre_material": "yeso",
    }


def test_decimal_and_whole_entries():
    assert validator.parse_entry("resina 0.5 litro")["tipo"] == "decimal"
    pincel = validator.parse_entry("pincel 2")
    assert pincel["cantidad"] == 2.0
    assert pincel["tipo"] == "entero"
    assert pincel["es_entero"] is True


def test_entry_without_number_keeps_name_only():
    assert validator.parse_entry("barniz") == {"nombre_material": "barniz"}
    assert validator.parse_entry("   ") == {}


def test_name_falls_back_when_only_quantity():
    assert validator.parse_entry("3 kg")["nombre_material"] == validator.DEFAULT_MATERIAL_NAME


@pytest.mark.parametrize(
    "entry, reason",
    [
        ("pincel 1/2", "no acepta fracciones"),
        ("lija 1.5", "requiere cantidad entera"),
        ("yeso 1/0 kg", "Denominador no puede ser cero"),
    ],
)
def test_rejected_entries(entry, reason):
    with pytest.raises(validator.MaterialFormatError) as exc:
        validator.parse_entry(entry)
    assert reason in str(exc.value)


def test_validate_list_reports_offending_entry():
    ok = validator.validate_materials_used("yeso 1/2 kg, pincel 2, barniz")
    assert [p["nombre_material"] for p in ok] == ["yeso", "pincel", "barniz"]

    with pytest.raises(validator.MaterialFormatError) as exc:
        validator.validate_materials_used("yeso 1 kg, Brocha 2.5")
    assert str(exc.value).startswith("Error en material 'Brocha 2.5': ")


def test_validate_empty_text():
    assert validator.validate_materials_used(None) == []
    assert validator.validate_materials_used("  ") == []
