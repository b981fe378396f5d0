"""Initial villa booking schema

Revision ID: initial_villa_schema
Revises:
Create Date: 2025-02-01

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'initial_villa_schema'
down_revision = None
branch_labels = None
depends_on = None


booking_type = sa.Enum('STAY', 'VIEWING', name='bookingtype')
booking_status = sa.Enum('PENDING', 'CONFIRMED', 'CANCELLED', name='bookingstatus')
property_status_type = sa.Enum(
    'AVAILABLE', 'RENOVATION', 'MAINTENANCE', 'SEASONAL_CLOSURE', 'PRIVATE_USE',
    name='propertystatustype'
)


def upgrade():
    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('has_notifications', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('has_booking_updates', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table('bookings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('type', booking_type, nullable=False),
        sa.Column('status', booking_status, nullable=False),
        sa.Column('check_in', sa.Date(), nullable=True),
        sa.Column('check_out', sa.Date(), nullable=True),
        sa.Column('guests', sa.Integer(), nullable=True),
        sa.Column('date', sa.Date(), nullable=True),
        sa.Column('time', sa.String(length=20), nullable=True),
        sa.Column('property_name', sa.String(length=120), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_bookings_user_id', 'bookings', ['user_id'])

    op.create_table('blocked_dates',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('blocked_date', sa.Date(), nullable=False),
        sa.Column('reason', sa.String(length=50), nullable=False),
        sa.Column('note', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_blocked_dates_blocked_date', 'blocked_dates', ['blocked_date'], unique=True)

    op.create_table('property_status',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('type', property_status_type, nullable=False),
        sa.Column('reason', sa.String(length=255), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )


def downgrade():
    op.drop_table('property_status')
    op.drop_index('ix_blocked_dates_blocked_date', table_name='blocked_dates')
    op.drop_table('blocked_dates')
    op.drop_index('ix_bookings_user_id', table_name='bookings')
    op.drop_table('bookings')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')

    property_status_type.drop(op.get_bind(), checkfirst=True)
    booking_status.drop(op.get_bind(), checkfirst=True)
    booking_type.drop(op.get_bind(), checkfirst=True)
