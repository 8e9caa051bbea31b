"""Link profiles to managed auth users

Revision ID: 7c8d9e0f1a2b
Revises: 1a2b3c4d5e6f
Create Date: 2025-05-22 09:47:35.102774

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '7c8d9e0f1a2b'
down_revision: Union[str, Sequence[str], None] = '1a2b3c4d5e6f'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'auth_user',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('encrypted_password', sa.String(), nullable=False),
        sa.Column('raw_user_meta_data', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_sign_in_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_auth_user_email'), 'auth_user', ['email'], unique=True)

    # Perfis criados pelo cadastro gerenciado não têm hash legado
    with op.batch_alter_table('profiles') as batch_op:
        batch_op.alter_column('password_hash', existing_type=sa.String(), nullable=True)
        batch_op.add_column(sa.Column('user_id', sa.Uuid(), nullable=True))
        batch_op.create_index(batch_op.f('ix_profiles_user_id'), ['user_id'], unique=True)
        batch_op.create_foreign_key(
            'fk_profiles_user_id_auth_user', 'auth_user', ['user_id'], ['id'], ondelete='CASCADE'
        )


def downgrade() -> None:
    with op.batch_alter_table('profiles') as batch_op:
        batch_op.drop_constraint('fk_profiles_user_id_auth_user', type_='foreignkey')
        batch_op.drop_index(batch_op.f('ix_profiles_user_id'))
        batch_op.drop_column('user_id')
        batch_op.alter_column('password_hash', existing_type=sa.String(), nullable=False)
    op.drop_index(op.f('ix_auth_user_email'), table_name='auth_user')
    op.drop_table('auth_user')
