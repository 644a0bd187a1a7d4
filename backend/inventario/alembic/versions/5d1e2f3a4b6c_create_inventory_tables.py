"""create inventory tables

Revision ID: 5d1e2f3a4b6c
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5d1e2f3a4b6c'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _index(table: str, *columns: str) -> None:
    for column in columns:
        op.create_index(op.f(f'ix_{table}_{column}'), table, [column], unique=False)


def upgrade() -> None:
    op.create_table(
        'usuario',
        sa.Column('id', sa.String(length=50), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('rol', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('activo', sa.Boolean(), nullable=False),
        sa.Column('fecha_creacion', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('usuario', 'id')
    op.create_index(op.f('ix_usuario_username'), 'usuario', ['username'], unique=True)

    op.create_table(
        'email_logs',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('sent_at', sa.DateTime(), nullable=True),
        sa.Column('recipient', sa.String(length=255), nullable=False),
        sa.Column('subject', sa.String(length=255), nullable=False),
        sa.Column('template_key', sa.String(length=128), nullable=False),
        sa.Column(
            'status',
            sa.Enum('QUEUED', 'SENT', 'FAILED', 'SKIPPED_NO_PROVIDER', name='email_status_enum', native_enum=False),
            nullable=False,
        ),
        sa.Column('error', sa.Text(), nullable=True),
        sa.Column('context_json', sa.JSON(), nullable=True),
        sa.Column('correlation_id', sa.String(length=64), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('email_logs', 'id', 'created_at', 'template_key', 'status', 'correlation_id')
    op.create_index('ix_email_logs_status_created', 'email_logs', ['status', 'created_at'], unique=False)
    op.create_index('ix_email_logs_template_recipient', 'email_logs', ['template_key', 'recipient'], unique=False)

    op.create_table(
        'producto',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('modelo', sa.String(length=150), nullable=False),
        sa.Column('color', sa.String(length=100), nullable=False),
        sa.Column('precio', sa.Integer(), nullable=False),
        sa.Column('stock', sa.Integer(), nullable=False),
        sa.Column('tamaño', sa.String(length=50), nullable=False),
        sa.Column('imagen_url', sa.String(length=500), nullable=False),
        sa.Column('activo', sa.Boolean(), nullable=False),
        sa.Column('creado_por', sa.String(length=100), nullable=True),
        sa.Column('fecha_creacion', sa.DateTime(), nullable=False),
        sa.Column('tipo', sa.String(length=50), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('producto', 'id', 'modelo', 'activo', 'tipo')

    op.create_table(
        'venta',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('cliente_id', sa.Integer(), nullable=False),
        sa.Column('producto_id', sa.Integer(), nullable=False),
        sa.Column('cantidad', sa.Integer(), nullable=False),
        sa.Column('precio_unitario', sa.Integer(), nullable=False),
        sa.Column('precio_total', sa.Integer(), nullable=False),
        sa.Column('fecha', sa.Date(), nullable=False),
        sa.Column('tipo', sa.String(length=50), nullable=False),
        sa.Column('usuario_registro', sa.String(length=100), nullable=False),
        sa.Column('fecha_registro', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['producto_id'], ['producto.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('venta', 'id', 'cliente_id', 'producto_id', 'fecha', 'fecha_registro')
    op.create_index(
        'ix_venta_duplicate_check', 'venta', ['cliente_id', 'producto_id', 'fecha', 'tipo'], unique=False
    )

    op.create_table(
        'pedidos',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('cliente_nombre', sa.String(length=200), nullable=False),
        sa.Column('cliente_contacto', sa.String(length=200), nullable=True),
        sa.Column('fecha_entrega', sa.String(length=50), nullable=True),
        sa.Column('notas', sa.Text(), nullable=True),
        sa.Column('etapa', sa.String(length=100), nullable=False),
        sa.Column('total', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('anticipo', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('total_cantidad', sa.Integer(), nullable=False),
        sa.Column('resumen_producto', sa.String(length=255), nullable=True),
        sa.Column('creado_por', sa.String(length=100), nullable=False),
        sa.Column('fecha_creacion', sa.DateTime(), nullable=False),
        sa.Column('fecha_actualizacion', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('pedidos', 'id', 'fecha_creacion')

    op.create_table(
        'pedido_productos',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('pedido_id', sa.Integer(), nullable=False),
        sa.Column('producto_id', sa.Integer(), nullable=True),
        sa.Column('producto_nombre', sa.String(length=255), nullable=False),
        sa.Column('cantidad', sa.Integer(), nullable=False),
        sa.Column('precio_unitario', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('subtotal', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.ForeignKeyConstraint(['pedido_id'], ['pedidos.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('pedido_productos', 'id', 'pedido_id', 'producto_id', 'producto_nombre')

    op.create_table(
        'pedido_etapas',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('pedido_id', sa.Integer(), nullable=False),
        sa.Column('etapa', sa.String(length=100), nullable=False),
        sa.Column('notas', sa.Text(), nullable=True),
        sa.Column('usuario', sa.String(length=100), nullable=False),
        sa.Column('fecha', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['pedido_id'], ['pedidos.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('pedido_etapas', 'id', 'pedido_id')

    op.create_table(
        'herramienta',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('nombre', sa.String(length=150), nullable=False),
        sa.Column('descripcion', sa.Text(), nullable=True),
        sa.Column('cantidad_total', sa.Integer(), nullable=False),
        sa.Column('cantidad_disponible', sa.Integer(), nullable=False),
        sa.Column('estatus', sa.String(length=50), nullable=False),
        sa.Column('usuario_asignado', sa.String(length=100), nullable=True),
        sa.Column('asignado_por', sa.String(length=100), nullable=True),
        sa.Column('fecha_asignacion', sa.DateTime(), nullable=True),
        sa.Column('activo', sa.Boolean(), nullable=False),
        sa.Column('creado_por', sa.String(length=100), nullable=True),
        sa.Column('fecha_creacion', sa.DateTime(), nullable=False),
        sa.Column('fecha_actualizacion', sa.DateTime(), nullable=True),
        sa.CheckConstraint(
            'cantidad_disponible >= 0 AND cantidad_disponible <= cantidad_total',
            name='ck_herramienta_disponible_range',
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('herramienta', 'id', 'nombre', 'estatus', 'activo')

    op.create_table(
        'materiaprima',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('nombre', sa.String(length=150), nullable=False),
        sa.Column('descripcion', sa.Text(), nullable=True),
        sa.Column('cantidad', sa.Integer(), nullable=False),
        sa.Column('unidad', sa.String(length=50), nullable=False),
        sa.Column('stock_minimo', sa.Integer(), nullable=False),
        sa.Column('costo', sa.Float(), nullable=False),
        sa.Column('categoria', sa.String(length=100), nullable=False),
        sa.Column('activo', sa.Boolean(), nullable=False),
        sa.Column('creado_por', sa.String(length=100), nullable=True),
        sa.Column('fecha_creacion', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('materiaprima', 'id', 'nombre', 'categoria', 'activo')

    op.create_table(
        'movimientomp',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('materia_id', sa.Integer(), nullable=False),
        sa.Column('fecha', sa.Date(), nullable=False),
        sa.Column(
            'tipo',
            sa.Enum('entrada', 'salida', 'consumo', name='tipo_movimiento_enum', native_enum=False),
            nullable=False,
        ),
        sa.Column('cantidad', sa.Integer(), nullable=False),
        sa.Column('usuario_id', sa.String(length=50), nullable=True),
        sa.Column('fecha_registro', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['materia_id'], ['materiaprima.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('movimientomp', 'id', 'materia_id', 'fecha', 'tipo')

    op.create_table(
        'reparacion',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('cliente_id', sa.Integer(), nullable=True),
        sa.Column('nombre_cliente', sa.String(length=200), nullable=False),
        sa.Column('contacto', sa.String(length=200), nullable=True),
        sa.Column('modelo', sa.String(length=200), nullable=False),
        sa.Column('material_original', sa.String(length=100), nullable=True),
        sa.Column('condicion', sa.Text(), nullable=True),
        sa.Column('costo_total', sa.Integer(), nullable=False),
        sa.Column('anticipo', sa.Integer(), nullable=False),
        sa.Column('fecha_ingreso', sa.Date(), nullable=False),
        sa.Column('fecha_entrega', sa.String(length=50), nullable=True),
        sa.Column('estado', sa.String(length=50), nullable=False),
        sa.Column('notas', sa.Text(), nullable=True),
        sa.Column('imagen_url', sa.String(length=500), nullable=True),
        sa.Column('recibo_url', sa.String(length=500), nullable=True),
        sa.Column('creado_por', sa.String(length=100), nullable=False),
        sa.Column('activo', sa.Boolean(), nullable=False),
        sa.Column('fecha_registro', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('reparacion', 'id', 'nombre_cliente', 'modelo', 'fecha_ingreso', 'estado', 'activo', 'fecha_registro')

    op.create_table(
        'HistorialReparacion',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('reparacion_id', sa.Integer(), nullable=False),
        sa.Column('fecha', sa.Date(), nullable=False),
        sa.Column('estado', sa.String(length=50), nullable=False),
        sa.Column('notas', sa.Text(), nullable=True),
        sa.Column('usuario_id', sa.String(length=50), nullable=True),
        sa.Column('fecha_registro', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['reparacion_id'], ['reparacion.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('HistorialReparacion', 'id', 'reparacion_id')

    op.create_table(
        'materialutilizado',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            'tipo_documento',
            sa.Enum('reparacion', 'pedido', name='tipo_documento_enum', native_enum=False),
            nullable=False,
        ),
        sa.Column('documento_id', sa.Integer(), nullable=False),
        sa.Column('materia_id', sa.Integer(), nullable=False),
        sa.Column('cantidad', sa.Integer(), nullable=False),
        sa.Column('costo_unitario', sa.Integer(), nullable=False),
        sa.Column('fecha', sa.Date(), nullable=False),
        sa.Column('usuario_id', sa.String(length=50), nullable=True),
        sa.Column('fecha_registro', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['materia_id'], ['materiaprima.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('materialutilizado', 'id', 'materia_id')
    op.create_index(
        'ix_materialutilizado_documento', 'materialutilizado', ['tipo_documento', 'documento_id'], unique=False
    )

    op.create_table(
        'recetario',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('producto_id', sa.Integer(), nullable=True),
        sa.Column('tiempo_fabricacion', sa.String(length=100), nullable=False),
        sa.Column('instrucciones', sa.Text(), nullable=False),
        sa.Column('notas', sa.Text(), nullable=True),
        sa.Column('herramientas', sa.Text(), nullable=True),
        sa.Column('creado_por', sa.String(length=100), nullable=True),
        sa.Column('fecha_creacion', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['producto_id'], ['producto.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('recetario', 'id', 'producto_id', 'fecha_creacion')

    op.create_table(
        'recetamaterial',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('receta_id', sa.Integer(), nullable=False),
        sa.Column('materia_id', sa.Integer(), nullable=True),
        sa.Column('cantidad', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('unidad', sa.String(length=50), nullable=True),
        sa.Column('nombre', sa.String(length=150), nullable=True),
        sa.ForeignKeyConstraint(['receta_id'], ['recetario.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['materia_id'], ['materiaprima.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('recetamaterial', 'id', 'receta_id', 'materia_id')

    op.create_table(
        'tareas',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('asunto', sa.String(length=200), nullable=False),
        sa.Column('detalles', sa.Text(), nullable=False),
        sa.Column('fecha_asignacion', sa.Date(), nullable=False),
        sa.Column('fecha_entrega', sa.Date(), nullable=False),
        sa.Column('cantidad_figuras', sa.Integer(), nullable=True),
        sa.Column('estado', sa.String(length=20), nullable=False),
        sa.Column('activo', sa.Boolean(), nullable=False),
        sa.Column('creado_por', sa.String(length=100), nullable=False),
        sa.Column('trabajador_id', sa.String(length=50), nullable=False),
        sa.Column('fecha_creacion', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    _index('tareas', 'id', 'estado', 'activo', 'trabajador_id', 'fecha_creacion')


def downgrade() -> None:
    for table in (
        'tareas',
        'recetamaterial',
        'recetario',
        'materialutilizado',
        'HistorialReparacion',
        'reparacion',
        'movimientomp',
        'materiaprima',
        'herramienta',
        'pedido_etapas',
        'pedido_productos',
        'pedidos',
        'venta',
        'producto',
        'email_logs',
        'usuario',
    ):
        op.drop_table(table)
