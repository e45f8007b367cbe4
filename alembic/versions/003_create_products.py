"""003: create products table

Revision ID: 003
Revises: 002
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE products (
            id                  UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            seller_id           UUID            NOT NULL,
            name                VARCHAR(128)    NOT NULL,
            cost                BIGINT          NOT NULL,
            amount_available    INT             NOT NULL DEFAULT 0,
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_products_name         UNIQUE (name),
            CONSTRAINT ck_products_name_len     CHECK (LENGTH(name) >= 1),
            CONSTRAINT ck_products_cost         CHECK (cost > 0),
            CONSTRAINT ck_products_amount       CHECK (amount_available >= 0),
            CONSTRAINT fk_products_seller       FOREIGN KEY (seller_id)
                REFERENCES users (id) ON DELETE CASCADE
        );
    """)
    op.execute("CREATE INDEX idx_products_seller ON products (seller_id);")
    op.execute("""
        CREATE TRIGGER trg_products_updated_at
            BEFORE UPDATE ON products
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS products CASCADE;")
