from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from inventario.apps.materiales import services as material_services
from inventario.utils.identifiers import receipt_number
from . import models, schemas, validator

logger = logging.getLogger(__name__)

ESTADOS_VALIDOS = [e.value for e in models.EstadoReparacion]

UPDATABLE_FIELDS = (
    "nombre_cliente",
    "contacto",
    "modelo",
    "material_original",
    "condicion",
    "costo_total",
    "anticipo",
    "fecha_entrega",
    "estado",
    "notas",
    "imagen_url",
    "recibo_url",
)


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def _not_found(detail: str = "Reparacion no encontrada") -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


def _check_materials_text(notas: Optional[str]) -> None:
    try:
        validator.validate_materials_used(notas)
    except validator.MaterialFormatError as exc:
        raise _bad_request(str(exc))


def _record_history(
    db: Session,
    reparacion: models.Reparacion,
    notas: str,
    usuario_id: Optional[str] = None,
) -> None:
    db.add(
        models.HistorialReparacion(
            reparacion_id=reparacion.id,
            fecha=date.today(),
            estado=reparacion.estado,
            notas=notas,
            usuario_id=usuario_id,
        )
    )


# ---------------------------------------------------------------------------
# REPAIRS
# ---------------------------------------------------------------------------


def list_repairs(
    db: Session,
    estado: Optional[str] = None,
    cliente: Optional[str] = None,
    modelo: Optional[str] = None,
) -> List[models.Reparacion]:
    qs = db.query(models.Reparacion).filter(models.Reparacion.activo.is_(True))
    if estado:
        qs = qs.filter(models.Reparacion.estado == estado)
    if cliente:
        qs = qs.filter(models.Reparacion.nombre_cliente.like(f"%{cliente}%"))
    if modelo:
        qs = qs.filter(models.Reparacion.modelo.like(f"%{modelo}%"))
    return qs.order_by(models.Reparacion.fecha_registro.desc(), models.Reparacion.id.desc()).all()


def find_repair(db: Session, repair_id: int) -> Optional[models.Reparacion]:
    return (
        db.query(models.Reparacion)
        .filter(models.Reparacion.id == repair_id, models.Reparacion.activo.is_(True))
        .first()
    )


def get_repair(db: Session, repair_id: int, *, not_found: str = "Reparacion no encontrada") -> models.Reparacion:
    reparacion = find_repair(db, repair_id)
    if not reparacion:
        raise _not_found(not_found)
    return reparacion


def create_repair(db: Session, payload: schemas.ReparacionCreate) -> models.Reparacion:
    if not payload.nombre_cliente or not payload.nombre_cliente.strip():
        raise _bad_request("El nombre del cliente es requerido")
    if not payload.modelo or not payload.modelo.strip():
        raise _bad_request("El modelo es requerido")
    if payload.costo_total is None or payload.costo_total < 0:
        raise _bad_request("El costo total debe ser mayor o igual a 0")
    _check_materials_text(payload.notas)

    reparacion = models.Reparacion(
        cliente_id=payload.cliente_id,
        nombre_cliente=payload.nombre_cliente,
        contacto=payload.contacto,
        modelo=payload.modelo,
        material_original=payload.material_original if payload.material_original is not None else "Yeso frio",
        condicion=payload.condicion,
        costo_total=payload.costo_total,
        anticipo=payload.anticipo if payload.anticipo is not None else 0,
        fecha_ingreso=payload.fecha_ingreso or date.today(),
        fecha_entrega=payload.fecha_entrega,
        estado=payload.estado or models.EstadoReparacion.PENDIENTE.value,
        notas=payload.notas,
        imagen_url=payload.imagen_url,
        recibo_url=payload.recibo_url if payload.recibo_url is not None else "",
        creado_por=payload.creado_por or "Sistema",
        activo=True,
    )
    db.add(reparacion)
    db.flush()
    _record_history(db, reparacion, "Reparacion registrada en el sistema", reparacion.creado_por)
    db.flush()
    logger.info("Created repair %s for %s", reparacion.id, reparacion.nombre_cliente)
    return reparacion


def update_repair(db: Session, repair_id: int, payload: schemas.ReparacionUpdate) -> models.Reparacion:
    """Write every field present in the payload; omitted fields keep their value."""
    reparacion = get_repair(db, repair_id, not_found="Reparacion no encontrada o no se pudo actualizar")
    changes = payload.model_dump(exclude_unset=True)
    if "nombre_cliente" in changes and not (changes["nombre_cliente"] or "").strip():
        raise _bad_request("El nombre del cliente es requerido")
    if "modelo" in changes and not (changes["modelo"] or "").strip():
        raise _bad_request("El modelo es requerido")
    if "anticipo" in changes and (changes["anticipo"] is None or changes["anticipo"] < 0):
        raise _bad_request("El anticipo debe ser mayor o igual a 0")
    if "costo_total" in changes and (changes["costo_total"] is None or changes["costo_total"] < 0):
        raise _bad_request("El costo total debe ser mayor o igual a 0")
    if "notas" in changes:
        _check_materials_text(changes["notas"])
    if "estado" in changes and changes["estado"] not in ESTADOS_VALIDOS:
        raise _bad_request("Estado no valido. Use: Pendiente, En Proceso, Completado, Entregado")

    previous_estado = reparacion.estado
    for field in UPDATABLE_FIELDS:
        if field in changes:
            setattr(reparacion, field, changes[field])
    db.flush()
    if reparacion.estado != previous_estado:
        _record_history(db, reparacion, f"Estado cambiado de {previous_estado} a {reparacion.estado}")
        db.flush()
    return reparacion


def change_state(
    db: Session,
    repair_id: int,
    estado: Optional[str],
    notas: Optional[str] = None,
    usuario_id: Optional[str] = None,
) -> models.Reparacion:
    if not estado or not estado.strip():
        raise _bad_request("El estado es requerido")
    if estado not in ESTADOS_VALIDOS:
        raise _bad_request("Estado no valido. Use: Pendiente, En Proceso, Completado, Entregado")
    reparacion = get_repair(
        db, repair_id, not_found="Reparacion no encontrada o no se pudo actualizar el estado"
    )
    previous_estado = reparacion.estado
    reparacion.estado = estado
    _record_history(
        db,
        reparacion,
        notas or f"Estado cambiado de {previous_estado} a {estado}",
        usuario_id,
    )
    db.flush()
    return reparacion


def list_history(db: Session, repair_id: int) -> List[models.HistorialReparacion]:
    get_repair(db, repair_id)
    return (
        db.query(models.HistorialReparacion)
        .filter(models.HistorialReparacion.reparacion_id == repair_id)
        .order_by(models.HistorialReparacion.fecha_registro.asc(), models.HistorialReparacion.id.asc())
        .all()
    )


def build_receipt(db: Session, repair_id: int) -> dict:
    reparacion = get_repair(db, repair_id)
    return {
        "id": reparacion.id,
        "numeroRecibo": receipt_number(),
        "fechaEmision": date.today().isoformat(),
        "cliente": reparacion.nombre_cliente,
        "contacto": reparacion.contacto,
        "modelo": reparacion.modelo,
        "descripcion": f"Reparacion de {reparacion.modelo}",
        "costoTotal": reparacion.costo_total,
        "anticipo": reparacion.anticipo,
        "saldoPendiente": reparacion.saldo_pendiente,
        "estado": reparacion.estado,
        "fechaEntrega": reparacion.fecha_entrega,
        "materialesUsados": reparacion.notas,
        "reciboUrl": reparacion.recibo_url,
    }


def deactivate_repair(db: Session, repair_id: int) -> models.Reparacion:
    reparacion = get_repair(db, repair_id, not_found="Reparacion no encontrada o no se pudo eliminar")
    reparacion.activo = False
    db.flush()
    return reparacion


# ---------------------------------------------------------------------------
# MATERIALS USED
# ---------------------------------------------------------------------------


def list_materials_used(db: Session, repair_id: int) -> List[models.MaterialUtilizado]:
    get_repair(db, repair_id)
    return (
        db.query(models.MaterialUtilizado)
        .filter(
            models.MaterialUtilizado.tipo_documento == models.TipoDocumento.REPARACION,
            models.MaterialUtilizado.documento_id == repair_id,
        )
        .order_by(models.MaterialUtilizado.fecha_registro.desc(), models.MaterialUtilizado.id.desc())
        .all()
    )


def materials_cost(materiales: List[models.MaterialUtilizado]) -> int:
    return sum(m.costo for m in materiales)


def register_material_used(
    db: Session,
    repair_id: int,
    payload: schemas.MaterialUtilizadoCreate,
) -> models.MaterialUtilizado:
    """Attach a raw material to a repair and take it out of stock."""
    get_repair(db, repair_id)
    if payload.materia_id is None:
        raise _bad_request("El material es requerido")
    if payload.cantidad is None or payload.cantidad <= 0:
        raise _bad_request("La cantidad debe ser un número positivo")

    materia = material_services.get_material(db, payload.materia_id)
    costo_unitario = payload.costo_unitario
    if costo_unitario is None:
        costo_unitario = int(round(materia.costo or 0))

    material_services.consume_material(db, materia.id, payload.cantidad, payload.usuario_id)
    registro = models.MaterialUtilizado(
        tipo_documento=models.TipoDocumento.REPARACION,
        documento_id=repair_id,
        materia_id=materia.id,
        cantidad=payload.cantidad,
        costo_unitario=costo_unitario,
        fecha=date.today(),
        usuario_id=payload.usuario_id,
    )
    db.add(registro)
    db.flush()
    logger.info("Repair %s used %s of material %s", repair_id, payload.cantidad, materia.id)
    return registro


def remove_material_used(db: Session, repair_id: int, material_used_id: int) -> None:
    registro = (
        db.query(models.MaterialUtilizado)
        .filter(
            models.MaterialUtilizado.id == material_used_id,
            models.MaterialUtilizado.tipo_documento == models.TipoDocumento.REPARACION,
            models.MaterialUtilizado.documento_id == repair_id,
        )
        .first()
    )
    if not registro:
        raise _not_found("Material utilizado no encontrado")
    # Registering took the units out of stock; give them back.
    material_services.release_consumption(
        db, registro.materia_id, registro.cantidad, registro.usuario_id, registro.fecha
    )
    db.delete(registro)
    db.flush()
