"""initial schema: users, pets, adoptions

Revision ID: 3f1c9a7b2d10
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7b2d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=32), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('street', sa.String(length=255), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('state', sa.String(length=100), nullable=True),
        sa.Column('zip_code', sa.String(length=20), nullable=True),
        sa.Column('country', sa.String(length=100), nullable=True),
        sa.Column('bio', sa.String(length=500), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.UniqueConstraint('email', name='ux_users_email'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=False)

    op.create_table(
        'pets',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('species', sa.String(length=32), nullable=False),
        sa.Column('breed', sa.String(length=100), nullable=False),
        sa.Column('age_years', sa.Integer(), nullable=True),
        sa.Column('age_months', sa.Integer(), nullable=True),
        sa.Column('size', sa.String(length=32), nullable=False),
        sa.Column('gender', sa.String(length=32), nullable=False),
        sa.Column('color', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('photos', sa.JSON(), nullable=False),
        sa.Column('vaccinated', sa.Boolean(), nullable=False),
        sa.Column('neutered', sa.Boolean(), nullable=False),
        sa.Column('special_needs', sa.Boolean(), nullable=False),
        sa.Column('special_needs_description', sa.Text(), nullable=True),
        sa.Column('good_with_kids', sa.Boolean(), nullable=False),
        sa.Column('good_with_other_pets', sa.Boolean(), nullable=False),
        sa.Column('activity_level', sa.String(length=32), nullable=False),
        sa.Column('adoption_status', sa.String(length=32), nullable=False),
        sa.Column('adoption_fee', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('formatted_address', sa.String(length=255), nullable=True),
        sa.Column('street', sa.String(length=255), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('state', sa.String(length=100), nullable=True),
        sa.Column('zip_code', sa.String(length=20), nullable=True),
        sa.Column('country', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_pets'),
    )
    op.create_index('ix_pets_adoption_status', 'pets', ['adoption_status'], unique=False)
    op.create_index(
        'ix_pets_catalogue',
        'pets',
        ['species', 'breed', 'adoption_status', 'size', 'gender'],
        unique=False,
    )

    op.create_table(
        'adoptions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('pet_id', sa.Uuid(), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('residence_type', sa.String(length=32), nullable=False),
        sa.Column('has_yard', sa.Boolean(), nullable=False),
        sa.Column('has_children', sa.Boolean(), nullable=False),
        sa.Column('has_other_pets', sa.Boolean(), nullable=False),
        sa.Column('other_pets_description', sa.Text(), nullable=True),
        sa.Column('pet_experience', sa.Text(), nullable=False),
        sa.Column('work_schedule', sa.Text(), nullable=False),
        sa.Column('additional_comments', sa.Text(), nullable=True),
        sa.Column('admin_comments', sa.String(length=1000), nullable=True),
        sa.Column('decision_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'], name='fk_adoptions_user_id_users', ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['pet_id'], ['pets.id'], name='fk_adoptions_pet_id_pets', ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_adoptions'),
        sa.UniqueConstraint('user_id', 'pet_id', name='ux_adoptions_user_pet'),
    )
    op.create_index('ix_adoptions_user_id', 'adoptions', ['user_id'], unique=False)
    op.create_index('ix_adoptions_pet_id', 'adoptions', ['pet_id'], unique=False)
    op.create_index('ix_adoptions_status', 'adoptions', ['status'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_adoptions_status', table_name='adoptions')
    op.drop_index('ix_adoptions_pet_id', table_name='adoptions')
    op.drop_index('ix_adoptions_user_id', table_name='adoptions')
    op.drop_table('adoptions')
    op.drop_index('ix_pets_catalogue', table_name='pets')
    op.drop_index('ix_pets_adoption_status', table_name='pets')
    op.drop_table('pets')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
