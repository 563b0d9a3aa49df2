"""Initial schema with users, tables and reservations

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '001_initial_schema'
down_revision = None

user_role = sa.Enum('ADMIN', 'STAFF', 'CUSTOMER', name='userrole')
table_location = sa.Enum('INDOOR', 'OUTDOOR', 'WINDOW', 'VIP', name='tablelocation')
table_status = sa.Enum('AVAILABLE', 'OCCUPIED', 'RESERVED', 'MAINTENANCE', name='tablestatus')
reservation_status = sa.Enum(
    'PENDING', 'CONFIRMED', 'SEATED', 'COMPLETED', 'CANCELLED', 'NO_SHOW',
    name='reservationstatus',
)

ACTIVE_SLOT_PREDICATE = sa.text("status IN ('PENDING', 'CONFIRMED', 'SEATED')")


def upgrade():
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(200), nullable=False),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('role', user_role, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # Create restaurant_tables table
    op.create_table(
        'restaurant_tables',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('table_number', sa.Integer(), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('location', table_location, nullable=False),
        sa.Column('description', sa.String(500), nullable=True),
        sa.Column('status', table_status, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_restaurant_tables_table_number', 'restaurant_tables', ['table_number'], unique=True)
    op.create_index('ix_restaurant_tables_status', 'restaurant_tables', ['status'])

    # Create reservations table
    op.create_table(
        'reservations',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('table_id', sa.Integer(), sa.ForeignKey('restaurant_tables.id'), nullable=False),
        sa.Column('reservation_date', sa.Date(), nullable=False),
        sa.Column('reservation_time', sa.Time(), nullable=False),
        sa.Column('guests', sa.Integer(), nullable=False),
        sa.Column('status', reservation_status, nullable=False),
        sa.Column('special_requests', sa.String(1000), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_reservations_user_id', 'reservations', ['user_id'])
    op.create_index('ix_reservations_table_id', 'reservations', ['table_id'])
    op.create_index('ix_reservations_status', 'reservations', ['status'])
    op.create_index('idx_reservation_date_time', 'reservations', ['reservation_date', 'reservation_time'])

    # At most one active reservation per table and slot
    op.create_index(
        'uq_reservation_active_slot',
        'reservations',
        ['table_id', 'reservation_date', 'reservation_time'],
        unique=True,
        sqlite_where=ACTIVE_SLOT_PREDICATE,
        postgresql_where=ACTIVE_SLOT_PREDICATE,
    )


def downgrade():
    op.drop_index('uq_reservation_active_slot', 'reservations')
    op.drop_index('idx_reservation_date_time', 'reservations')
    op.drop_index('ix_reservations_status', 'reservations')
    op.drop_index('ix_reservations_table_id', 'reservations')
    op.drop_index('ix_reservations_user_id', 'reservations')
    op.drop_table('reservations')

    op.drop_index('ix_restaurant_tables_status', 'restaurant_tables')
    op.drop_index('ix_restaurant_tables_table_number', 'restaurant_tables')
    op.drop_table('restaurant_tables')

    op.drop_index('ix_users_email', 'users')
    op.drop_index('ix_users_username', 'users')
    op.drop_table('users')

    bind = op.get_bind()
    for enum_type in (reservation_status, table_status, table_location, user_role):
        enum_type.drop(bind, checkfirst=True)
