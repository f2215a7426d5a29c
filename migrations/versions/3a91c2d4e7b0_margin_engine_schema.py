"""Margin engine schema: ingredients, tags, menu items, cost links, alerts

Revision ID: 3a91c2d4e7b0
Revises:
Create Date: 2026-10-18 09:12:40.118203

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3a91c2d4e7b0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'ingredient',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('store_id', sa.String(length=64), nullable=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=True),
        sa.Column('unit', sa.String(length=20), nullable=True),
        sa.Column('last_price', sa.Float(), nullable=True),
        sa.Column('price_per_unit', sa.Float(), nullable=True),
        sa.Column('previous_price', sa.Float(), nullable=True),
        sa.Column('price_updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_ingredient_store_id', 'ingredient', ['store_id'])
    op.create_index('ix_ingredient_name', 'ingredient', ['name'])
    op.create_index('ix_ingredient_category', 'ingredient', ['category'])

    op.create_table(
        'ingredient_tag',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('tag', sa.String(length=100), nullable=False),
        sa.Column('ingredient_id', sa.Integer(),
                  sa.ForeignKey('ingredient.id', ondelete='CASCADE'), nullable=False),
    )
    op.create_index('ix_ingredient_tag_tag', 'ingredient_tag', ['tag'])
    op.create_index('ix_ingredient_tag_ingredient_id', 'ingredient_tag', ['ingredient_id'])

    op.create_table(
        'menu_item',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('store_id', sa.String(length=64), nullable=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=True),
        sa.Column('selling_price', sa.Float(), nullable=True),
        sa.Column('base_cost', sa.Float(), nullable=True),
        sa.Column('current_cost', sa.Float(), nullable=True),
        sa.Column('margin_percent', sa.Float(), nullable=True),
        sa.Column('safety_margin_percent', sa.Float(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
    )
    op.create_index('ix_menu_item_store_id', 'menu_item', ['store_id'])
    op.create_index('ix_menu_item_name', 'menu_item', ['name'])

    op.create_table(
        'menu_ingredient',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('menu_id', sa.Integer(),
                  sa.ForeignKey('menu_item.id', ondelete='CASCADE'), nullable=False),
        sa.Column('ingredient_id', sa.Integer(),
                  sa.ForeignKey('ingredient.id', ondelete='CASCADE'), nullable=False),
        sa.Column('quantity', sa.Float(), nullable=False),
        sa.Column('unit', sa.String(length=20), nullable=True),
        sa.UniqueConstraint('menu_id', 'ingredient_id', name='uq_menu_ingredient'),
    )
    op.create_index('ix_menu_ingredient_menu_id', 'menu_ingredient', ['menu_id'])
    op.create_index('ix_menu_ingredient_ingredient_id', 'menu_ingredient', ['ingredient_id'])

    op.create_table(
        'margin_alert',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('store_id', sa.String(length=64), nullable=True),
        sa.Column('menu_id', sa.Integer(),
                  sa.ForeignKey('menu_item.id', ondelete='SET NULL'), nullable=True),
        sa.Column('ingredient_id', sa.Integer(),
                  sa.ForeignKey('ingredient.id', ondelete='SET NULL'), nullable=True),
        sa.Column('alert_type', sa.String(length=20), nullable=False),
        sa.Column('severity', sa.String(length=10), nullable=False),
        sa.Column('message', sa.String(length=255), nullable=False),
        sa.Column('old_value', sa.Float(), nullable=True),
        sa.Column('new_value', sa.Float(), nullable=True),
        sa.Column('change_percent', sa.Float(), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=True),
        sa.Column('is_resolved', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('resolved_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_margin_alert_store_id', 'margin_alert', ['store_id'])
    op.create_index('ix_margin_alert_menu_id', 'margin_alert', ['menu_id'])
    op.create_index('ix_margin_alert_ingredient_id', 'margin_alert', ['ingredient_id'])
    op.create_index('ix_margin_alert_is_read', 'margin_alert', ['is_read'])


def downgrade():
    op.drop_table('margin_alert')
    op.drop_table('menu_ingredient')
    op.drop_table('menu_item')
    op.drop_table('ingredient_tag')
    op.drop_table('ingredient')
