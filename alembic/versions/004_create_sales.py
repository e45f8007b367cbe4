"""004: create sales table (append-only purchase records)

Revision ID: 004
Revises: 003
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE sales (
            id              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            buyer_id        UUID            NOT NULL,
            product_id      UUID            NOT NULL,
            quantity        INT             NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_sales_quantity    CHECK (quantity > 0),
            CONSTRAINT fk_sales_buyer       FOREIGN KEY (buyer_id)
                REFERENCES users (id) ON DELETE CASCADE,
            CONSTRAINT fk_sales_product     FOREIGN KEY (product_id)
                REFERENCES products (id) ON DELETE CASCADE
        );
    """)
    op.execute("CREATE INDEX idx_sales_buyer ON sales (buyer_id, product_id);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS sales CASCADE;")
