"""create company profile, sales docs and sales items

Revision ID: 5b2e9c1d7a40
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "5b2e9c1d7a40"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "company_profiles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("company_name", sa.String(200), nullable=True),
        sa.Column("tax_id", sa.String(40), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("phone", sa.String(80), nullable=True),
        sa.Column("email", sa.String(120), nullable=True),
        sa.Column("bank_name", sa.String(120), nullable=True),
        sa.Column("bank_account", sa.String(60), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "sales_docs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("doc_type", sa.String(10), nullable=False, server_default="QT"),
        sa.Column("doc_no", sa.String(40), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="DRAFT"),
        sa.Column("issue_date", sa.Date(), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("company_name", sa.String(200), nullable=True),
        sa.Column("company_tax_id", sa.String(40), nullable=True),
        sa.Column("company_address", sa.Text(), nullable=True),
        sa.Column("company_phone", sa.String(80), nullable=True),
        sa.Column("customer_name", sa.String(200), nullable=False),
        sa.Column("customer_tax_id", sa.String(40), nullable=True),
        sa.Column("customer_address", sa.Text(), nullable=True),
        sa.Column("customer_phone", sa.String(80), nullable=True),
        sa.Column("customer_email", sa.String(120), nullable=True),
        sa.Column("subject", sa.String(255), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("discount_amount", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("vat_rate", sa.Numeric(5, 2), nullable=False, server_default="7"),
        sa.Column("wht_rate", sa.Numeric(5, 2), nullable=False, server_default="0"),
        sa.Column("manual_subtotal", sa.Numeric(14, 2), nullable=True),
        sa.Column("approved_at", sa.DateTime(), nullable=True),
        sa.Column("parent_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["parent_id"], ["sales_docs.id"], name="fk_sales_docs_parent", ondelete="SET NULL"),
        sa.UniqueConstraint("doc_no", name="ux_sales_docs_doc_no"),
        sa.CheckConstraint("discount_amount >= 0", name="ck_sales_docs_discount_nonneg"),
        sa.CheckConstraint("vat_rate >= 0", name="ck_sales_docs_vat_rate_nonneg"),
        sa.CheckConstraint("wht_rate >= 0", name="ck_sales_docs_wht_rate_nonneg"),
    )
    op.create_index("ix_sales_docs_doc_type", "sales_docs", ["doc_type"])
    op.create_index("ix_sales_docs_status", "sales_docs", ["status"])

    op.create_table(
        "sales_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("doc_id", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("qty", sa.Numeric(12, 2), nullable=False, server_default="1"),
        sa.Column("unit_price", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("discount_amount", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("amount", sa.Numeric(14, 2), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["doc_id"], ["sales_docs.id"], name="fk_sales_items_doc", ondelete="CASCADE"),
        sa.CheckConstraint("qty >= 0", name="ck_sales_items_qty_nonneg"),
        sa.CheckConstraint("unit_price >= 0", name="ck_sales_items_unit_price_nonneg"),
    )
    op.create_index("ix_sales_items_doc_id", "sales_items", ["doc_id"])


def downgrade():
    op.drop_index("ix_sales_items_doc_id", table_name="sales_items")
    op.drop_table("sales_items")
    op.drop_index("ix_sales_docs_status", table_name="sales_docs")
    op.drop_index("ix_sales_docs_doc_type", table_name="sales_docs")
    op.drop_table("sales_docs")
    op.drop_table("company_profiles")
