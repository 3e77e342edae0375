from alembic import op
import sqlalchemy as sa


revision = "0001_create_customer"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    id_options = {}
    # PostgreSQL drives the identifier from an explicit sequence; SQLite uses its rowid
    if op.get_bind().dialect.supports_sequences:
        op.execute(sa.schema.CreateSequence(sa.Sequence("customer_id_seq", start=1, increment=1)))
        id_options = {
            "autoincrement": False,
            "server_default": sa.text("nextval('customer_id_seq')"),
        }

    op.create_table(
        "customer",
        sa.Column(
            "id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            primary_key=True,
            **id_options,
        ),
        sa.Column("first_name", sa.String(255), nullable=False),
        sa.Column("last_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("personal_id_number", sa.String(64), nullable=False),
        sa.Column("phone_number", sa.String(50), nullable=False),
        sa.Column("created", sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column("updated", sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()),
        sa.UniqueConstraint("email", name="uq_customer_email"),
        sa.UniqueConstraint("personal_id_number", name="uq_customer_personal_id_number"),
    )


def downgrade() -> None:
    raise NotImplementedError("0001_create_customer is a one-way migration")
