"""init_db_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Schema:
- user: accounts, organizer flag marks who may publish concerts
- venue: name and address
- concert: listing plus its single ticket class (type, price, num_avail, total_tickets)
- reservation: UUID7 primary key, cascades with its user and concert

Inventory guard: 0 <= num_avail <= total_tickets is enforced by check constraints,
so no write path can oversell even if application checks are bypassed.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables with final schema."""

    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('organizer', sa.Boolean(), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_user_username'), 'user', ['username'], unique=True)
    op.create_index(op.f('ix_user_email'), 'user', ['email'], unique=True)

    op.create_table(
        'venue',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_venue_name'), 'venue', ['name'], unique=False)

    op.create_table(
        'concert',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('artist', sa.String(length=255), nullable=False),
        sa.Column('venue_id', sa.Integer(), nullable=True),
        sa.Column('tour', sa.String(length=255), nullable=False),
        sa.Column('starts_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('genre', sa.String(length=100), nullable=False),
        sa.Column('rules', sa.Text(), nullable=True),
        sa.Column('organizer', sa.String(length=100), nullable=False),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.Column('ticket_type', sa.String(length=100), nullable=False),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('num_avail', sa.Integer(), nullable=False),
        sa.Column('total_tickets', sa.Integer(), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint('num_avail >= 0', name='ck_concert_num_avail_non_negative'),
        sa.CheckConstraint('num_avail <= total_tickets', name='ck_concert_num_avail_within_total'),
        sa.CheckConstraint('price >= 0', name='ck_concert_price_non_negative'),
        sa.ForeignKeyConstraint(['venue_id'], ['venue.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_concert_venue_id'), 'concert', ['venue_id'], unique=False)
    op.create_index(op.f('ix_concert_genre'), 'concert', ['genre'], unique=False)
    op.create_index(op.f('ix_concert_organizer'), 'concert', ['organizer'], unique=False)

    op.create_table(
        'reservation',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('concert_id', sa.Integer(), nullable=False),
        sa.Column('num_tickets', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column(
            'reserved_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint('num_tickets > 0', name='ck_reservation_num_tickets_positive'),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['concert_id'], ['concert.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_reservation_user_id'), 'reservation', ['user_id'], unique=False)
    op.create_index(
        op.f('ix_reservation_concert_id'), 'reservation', ['concert_id'], unique=False
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index(op.f('ix_reservation_concert_id'), table_name='reservation')
    op.drop_index(op.f('ix_reservation_user_id'), table_name='reservation')
    op.drop_table('reservation')

    op.drop_index(op.f('ix_concert_organizer'), table_name='concert')
    op.drop_index(op.f('ix_concert_genre'), table_name='concert')
    op.drop_index(op.f('ix_concert_venue_id'), table_name='concert')
    op.drop_table('concert')

    op.drop_index(op.f('ix_venue_name'), table_name='venue')
    op.drop_table('venue')

    op.drop_index(op.f('ix_user_email'), table_name='user')
    op.drop_index(op.f('ix_user_username'), table_name='user')
    op.drop_table('user')
