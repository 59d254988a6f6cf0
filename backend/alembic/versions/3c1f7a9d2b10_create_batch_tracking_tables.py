"""create batch tracking tables

Revision ID: 3c1f7a9d2b10
Revises:
Create Date: 2026-10-18 10:12:41.508213

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3c1f7a9d2b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

MORTALITY_CAUSES = (
    'DISEASE', 'PREDATOR', 'WEATHER', 'UNKNOWN', 'OTHER',
    'STARVATION', 'INJURY', 'POISONING', 'SUFFOCATION', 'CULLING',
)
FEED_TYPES = (
    'STARTER', 'GROWER', 'FINISHER', 'LAYER_MASH', 'FISH_FEED', 'CATTLE_FEED',
    'GOAT_FEED', 'SHEEP_FEED', 'HAY', 'SILAGE', 'BEE_FEED',
)


def _timestamp_columns():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_by', sa.String(), nullable=True),
        sa.Column('updated_by', sa.String(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'batch',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('tenant_id', sa.String(), nullable=False),
        sa.Column('batch_no', sa.String(), nullable=False),
        sa.Column('species', sa.String(), nullable=False),
        sa.Column('initial_quantity', sa.Integer(), nullable=False),
        sa.Column('current_quantity', sa.Integer(), nullable=False),
        sa.Column('cost_per_unit', sa.Numeric(12, 2), nullable=True),
        sa.Column('total_cost', sa.Numeric(14, 2), nullable=True),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('acquisition_date', sa.Date(), nullable=True),
        sa.Column('target_harvest_date', sa.Date(), nullable=True),
        *_timestamp_columns(),
    )
    op.create_index('ix_batch_id', 'batch', ['id'])
    op.create_index('ix_batch_tenant_id', 'batch', ['tenant_id'])

    op.create_table(
        'mortality_record',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('tenant_id', sa.String(), nullable=False),
        sa.Column('batch_id', sa.Integer(), sa.ForeignKey('batch.id'), nullable=False),
        sa.Column('date', sa.Date(), nullable=True),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('cause', sa.Enum(*MORTALITY_CAUSES, name='mortalitycause'), nullable=False),
        sa.Column('notes', sa.String(), nullable=True),
        *_timestamp_columns(),
    )
    op.create_index('ix_mortality_record_id', 'mortality_record', ['id'])
    op.create_index('ix_mortality_record_tenant_id', 'mortality_record', ['tenant_id'])
    op.create_index('ix_mortality_record_batch_id', 'mortality_record', ['batch_id'])

    op.create_table(
        'feed_record',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('tenant_id', sa.String(), nullable=False),
        sa.Column('batch_id', sa.Integer(), sa.ForeignKey('batch.id'), nullable=False),
        sa.Column('date', sa.Date(), nullable=True),
        sa.Column('feed_type', sa.Enum(*FEED_TYPES, name='feedtype'), nullable=False),
        sa.Column('quantity_kg', sa.Numeric(12, 2), nullable=False),
        sa.Column('cost', sa.Numeric(12, 2), nullable=True),
        *_timestamp_columns(),
    )
    op.create_index('ix_feed_record_id', 'feed_record', ['id'])
    op.create_index('ix_feed_record_tenant_id', 'feed_record', ['tenant_id'])
    op.create_index('ix_feed_record_batch_id', 'feed_record', ['batch_id'])

    op.create_table(
        'weight_sample',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('tenant_id', sa.String(), nullable=False),
        sa.Column('batch_id', sa.Integer(), sa.ForeignKey('batch.id'), nullable=False),
        sa.Column('date', sa.Date(), nullable=True),
        sa.Column('sample_size', sa.Integer(), nullable=False),
        sa.Column('average_weight_kg', sa.Numeric(10, 3), nullable=False),
        *_timestamp_columns(),
    )
    op.create_index('ix_weight_sample_id', 'weight_sample', ['id'])
    op.create_index('ix_weight_sample_tenant_id', 'weight_sample', ['tenant_id'])
    op.create_index('ix_weight_sample_batch_id', 'weight_sample', ['batch_id'])


def downgrade() -> None:
    op.drop_table('weight_sample')
    op.drop_table('feed_record')
    op.drop_table('mortality_record')
    op.drop_table('batch')
    sa.Enum(name='feedtype').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='mortalitycause').drop(op.get_bind(), checkfirst=True)
