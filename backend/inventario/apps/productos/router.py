from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from inventario.database import get_db
from inventario.schemas import dump, dump_all
from inventario.utils.responses import envelope
from . import schemas, services

router = APIRouter(prefix="/productos", tags=["productos"])


@router.get("/")
def list_products(db: Session = Depends(get_db)):
    productos = services.list_products(db)
    return envelope(
        "Productos listados exitosamente",
        productos=dump_all(productos, schemas.ProductoRead),
        total=len(productos),
    )


@router.get("/filtrar")
def filter_products(tipo: Optional[str] = Query(None), db: Session = Depends(get_db)):
    productos = services.list_products_by_type(db, tipo)
    return envelope(
        productos=dump_all(productos, schemas.ProductoCatalogo),
        total=len(productos),
    )


@router.post("/publish")
def publish_prices():
    # The public catalogue reads prices straight from the table.
    return envelope("Precios publicados exitosamente en el catálogo")


@router.post("/upload")
def upload_image(imagen: Optional[UploadFile] = File(None)):
    if imagen is None or not imagen.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No se proporcionó ninguna imagen",
        )
    content = imagen.file.read()
    url = services.upload_product_image(content, imagen.filename)
    return envelope("Imagen subida exitosamente", imageUrl=url)


@router.get("/{product_id}")
def get_product(product_id: int, db: Session = Depends(get_db)):
    producto = services.get_product(db, product_id)
    return envelope("Producto encontrado exitosamente", producto=dump(producto, schemas.ProductoRead))


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_product(payload: schemas.ProductoCreate, db: Session = Depends(get_db)):
    producto = services.create_product(db, payload)
    db.commit()
    db.refresh(producto)
    return envelope("Producto creado exitosamente", producto=dump(producto, schemas.ProductoRead))


@router.put("/{product_id}")
def update_product(product_id: int, payload: schemas.ProductoUpdate, db: Session = Depends(get_db)):
    producto = services.update_product(db, product_id, payload)
    db.commit()
    db.refresh(producto)
    return envelope("Producto actualizado exitosamente", producto=dump(producto, schemas.ProductoRead))


@router.delete("/{product_id}")
def delete_product(product_id: int, db: Session = Depends(get_db)):
    producto = services.deactivate_product(db, product_id)
    db.commit()
    return envelope("Producto eliminado exitosamente", producto=producto.modelo)
