from datetime import datetime

import pytest

from app.core.errors import ValidationError
from app.schemas.pago import (
    PAGINA_MAXIMA,
    validate_pago_create,
    validate_pago_list_query,
    validate_pago_stats_query,
    validate_pago_update,
)

VALIDO = {"nombrePagador": "María Núñez", "monto": 25, "fecha": "2024-05-01T10:00:00Z"}


def _campos(exc_info):
    return exc_info.value.fields


def test_create_accepts_valid_payload():
    pago = validate_pago_create({**VALIDO, "codigoSeguridad": "123456", "numeroTelefono": "+51 987 654 321"})
    assert pago.nombre_pagador == "María Núñez"
    assert pago.monto == 25.0
    assert pago.fecha == datetime(2024, 5, 1, 10, 0, 0)
    assert pago.codigo_seguridad == "123456"


def test_create_security_code_is_optional():
    assert validate_pago_create(VALIDO).codigo_seguridad is None


def test_create_converts_offset_to_utc():
    pago = validate_pago_create({**VALIDO, "fecha": "2024-05-01T10:00:00-05:00"})
    assert pago.fecha == datetime(2024, 5, 1, 15, 0, 0)


def test_create_reports_every_missing_field():
    with pytest.raises(ValidationError) as exc_info:
        validate_pago_create({})
    assert set(_campos(exc_info)) == {"nombrePagador", "monto", "fecha"}
    assert all(e.message == "Campo requerido" for e in exc_info.value.errors)


def test_create_none_is_treated_as_empty_object():
    with pytest.raises(ValidationError):
        validate_pago_create(None)


@pytest.mark.parametrize(
    "nombre, mensaje",
    [
        ("J", "al menos 2"),
        ("x" * 101, "exceder 100"),
        ("Juan123", "letras"),
        (12, "texto"),
    ],
)
def test_create_rejects_bad_payer_name(nombre, mensaje):
    with pytest.raises(ValidationError) as exc_info:
        validate_pago_create({**VALIDO, "nombrePagador": nombre})
    assert _campos(exc_info) == ["nombrePagador"]
    assert mensaje in exc_info.value.errors[0].message


@pytest.mark.parametrize("monto", [0, -5, 1000000, 999999.999, "100", True, float("nan"), float("inf")])
def test_create_rejects_bad_amount(monto):
    with pytest.raises(ValidationError) as exc_info:
        validate_pago_create({**VALIDO, "monto": monto})
    assert _campos(exc_info) == ["monto"]


def test_create_accepts_amount_boundaries():
    assert validate_pago_create({**VALIDO, "monto": 999999.99}).monto == 999999.99
    assert validate_pago_create({**VALIDO, "monto": 0.01}).monto == 0.01


@pytest.mark.parametrize(
    "fecha",
    [
        "2024-05-01",
        "ayer",
        "2024-13-01T10:00:00Z",
        1714557600,
        "0001-01-01T00:00:00+01:00",
        "9999-12-31T23:00:00-05:00",
    ],
)
def test_create_rejects_bad_date(fecha):
    with pytest.raises(ValidationError) as exc_info:
        validate_pago_create({**VALIDO, "fecha": fecha})
    assert _campos(exc_info) == ["fecha"]


@pytest.mark.parametrize("codigo", ["12345", "1234567", "12a456", "123456\n", 123456])
def test_create_rejects_bad_security_code(codigo):
    with pytest.raises(ValidationError) as exc_info:
        validate_pago_create({**VALIDO, "codigoSeguridad": codigo})
    assert _campos(exc_info) == ["codigoSeguridad"]


@pytest.mark.parametrize("telefono", ["12345678", "1234567890123456", "98765432a"])
def test_create_rejects_bad_phone(telefono):
    with pytest.raises(ValidationError) as exc_info:
        validate_pago_create({**VALIDO, "numeroTelefono": telefono})
    assert _campos(exc_info) == ["numeroTelefono"]


def test_create_ignores_owner_and_unknown_fields():
    pago = validate_pago_create({**VALIDO, "usuarioId": "x", "propietario": "y"})
    assert not hasattr(pago, "usuario_id")


def test_validation_error_payload_shape():
    with pytest.raises(ValidationError) as exc_info:
        validate_pago_create({**VALIDO, "monto": -1})
    body = exc_info.value.to_dict()
    assert body["success"] is False
    assert body["errors"] == [{"field": "monto", "message": "El monto debe ser mayor a 0"}]


def test_update_accepts_empty_payload():
    assert validate_pago_update({}).to_dto().model_dump(exclude_unset=True) == {}


def test_update_validates_only_sent_fields():
    cambios = validate_pago_update({"monto": 10}).to_dto()
    assert cambios.model_dump(exclude_unset=True) == {"monto": 10.0}


def test_update_explicit_null_means_no_change():
    cambios = validate_pago_update({"nombrePagador": None, "monto": 12.5}).to_dto()
    assert cambios.model_dump(exclude_unset=True) == {"monto": 12.5}


def test_update_rejects_invalid_amount():
    with pytest.raises(ValidationError) as exc_info:
        validate_pago_update({"monto": 0})
    assert _campos(exc_info) == ["monto"]


def test_list_query_defaults():
    query = validate_pago_list_query({})
    assert (query.page, query.limit, query.search) == (1, 20, None)
    assert query.start_date is None and query.end_date is None


def test_list_query_parses_strings():
    query = validate_pago_list_query({"page": "3", "limit": "50", "search": "  juan "})
    assert (query.page, query.limit, query.search) == (3, 50, "juan")


def test_list_query_blank_search_is_none():
    assert validate_pago_list_query({"search": "   "}).search is None


@pytest.mark.parametrize(
    "params, campo",
    [
        ({"page": "0"}, "page"),
        ({"page": "-1"}, "page"),
        ({"page": "uno"}, "page"),
        ({"page": "10000000000000000000"}, "page"),
        ({"page": str(PAGINA_MAXIMA + 1)}, "page"),
        ({"limit": "0"}, "limit"),
        ({"limit": "101"}, "limit"),
        ({"startDate": "2024-01-01"}, "startDate"),
    ],
)
def test_list_query_rejects_bad_params(params, campo):
    with pytest.raises(ValidationError) as exc_info:
        validate_pago_list_query(params)
    assert _campos(exc_info) == [campo]


def test_list_query_rejects_inverted_range():
    with pytest.raises(ValidationError) as exc_info:
        validate_pago_list_query(
            {"startDate": "2024-02-01T00:00:00Z", "endDate": "2024-01-01T00:00:00Z"}
        )
    assert _campos(exc_info) == ["endDate"]


def test_list_query_builds_filters():
    filtros = validate_pago_list_query(
        {"search": "ana", "startDate": "2024-01-01T00:00:00Z", "endDate": "2024-01-31T23:59:59Z"}
    ).filtros()
    assert filtros.search == "ana"
    assert filtros.desde == datetime(2024, 1, 1)
    assert filtros.hasta == datetime(2024, 1, 31, 23, 59, 59)


def test_stats_query_parses_owner_id():
    query = validate_pago_stats_query({"propietarioId": "6f1c1a2e-51d7-4a43-9a57-3f3c1f6f0a10"})
    assert str(query.propietario_id) == "6f1c1a2e-51d7-4a43-9a57-3f3c1f6f0a10"


def test_stats_query_rejects_bad_owner_id():
    with pytest.raises(ValidationError) as exc_info:
        validate_pago_stats_query({"propietarioId": "no-es-uuid"})
    assert _campos(exc_info) == ["propietarioId"]


def test_list_query_accepts_last_representable_page():
    query = validate_pago_list_query({"page": str(PAGINA_MAXIMA), "limit": "100"})
    assert (query.page - 1) * query.limit <= 2**63 - 1


@pytest.mark.parametrize(
    "propietario_id",
    [
        "{6f1c1a2e-51d7-4a43-9a57-3f3c1f6f0a10}",
        "urn:uuid:6f1c1a2e-51d7-4a43-9a57-3f3c1f6f0a10",
        "6f1c1a2e51d74a439a573f3c1f6f0a10",
    ],
)
def test_stats_query_requires_canonical_owner_id(propietario_id):
    with pytest.raises(ValidationError) as exc_info:
        validate_pago_stats_query({"propietarioId": propietario_id})
    assert _campos(exc_info) == ["propietarioId"]
