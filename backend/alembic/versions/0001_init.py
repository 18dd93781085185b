from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "holders",
        sa.Column("address", sa.String(length=42), primary_key=True),
        sa.Column("balance", sa.String(length=78), nullable=False, server_default="0"),
        sa.Column("cumulative_balance", sa.String(length=78), nullable=False, server_default="0"),
        sa.Column("total_earned", sa.String(length=78), nullable=False, server_default="0"),
        sa.Column("last_accrual_epoch_start", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True),
    )

    op.create_table(
        "event_transfers",
        sa.Column("transaction_hash", sa.String(length=66), primary_key=True),
        sa.Column("emitter", sa.String(length=42), nullable=False),
        sa.Column("contract", sa.String(length=42), nullable=False),
        sa.Column("timestamp", sa.BigInteger(), nullable=False),
        sa.Column("from_address", sa.String(length=42), nullable=False),
        sa.Column("to_address", sa.String(length=42), nullable=False),
        sa.Column("value", sa.String(length=78), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True),
    )
    op.create_index("ix_event_transfers_timestamp", "event_transfers", ["timestamp"], unique=False)
    op.create_index("ix_event_transfers_from_address", "event_transfers", ["from_address"], unique=False)
    op.create_index("ix_event_transfers_to_address", "event_transfers", ["to_address"], unique=False)
    op.create_index(
        "ix_event_transfers_timestamp_hash", "event_transfers", ["timestamp", "transaction_hash"], unique=False
    )

    op.create_table(
        "rebase_rates",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("effective_at", sa.BigInteger(), nullable=False),
        sa.Column("rate", sa.String(length=78), nullable=False),
        sa.Column("rate_decimals", sa.Integer(), nullable=False),
        sa.Column("rebase_start_time", sa.BigInteger(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True),
    )
    op.create_index("ix_rebase_rates_effective_at", "rebase_rates", ["effective_at"], unique=True)

    op.create_table(
        "debit_clamps",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True),
        sa.Column("transaction_hash", sa.String(length=66), nullable=False),
        sa.Column("address", sa.String(length=42), nullable=False),
        sa.Column("block_timestamp", sa.BigInteger(), nullable=False),
        sa.Column("value", sa.String(length=78), nullable=False),
        sa.Column("balance_before", sa.String(length=78), nullable=False),
        sa.Column("cumulative_balance_before", sa.String(length=78), nullable=False),
    )
    op.create_index("ix_debit_clamps_created_at", "debit_clamps", ["created_at"], unique=False)
    op.create_index("ix_debit_clamps_transaction_hash", "debit_clamps", ["transaction_hash"], unique=False)
    op.create_index("ix_debit_clamps_address", "debit_clamps", ["address"], unique=False)
    op.create_index("ix_debit_clamps_address_created", "debit_clamps", ["address", "created_at"], unique=False)

def downgrade():
    op.drop_index("ix_debit_clamps_address_created", table_name="debit_clamps")
    op.drop_index("ix_debit_clamps_address", table_name="debit_clamps")
    op.drop_index("ix_debit_clamps_transaction_hash", table_name="debit_clamps")
    op.drop_index("ix_debit_clamps_created_at", table_name="debit_clamps")
    op.drop_table("debit_clamps")

    op.drop_index("ix_rebase_rates_effective_at", table_name="rebase_rates")
    op.drop_table("rebase_rates")

    op.drop_index("ix_event_transfers_timestamp_hash", table_name="event_transfers")
    op.drop_index("ix_event_transfers_to_address", table_name="event_transfers")
    op.drop_index("ix_event_transfers_from_address", table_name="event_transfers")
    op.drop_index("ix_event_transfers_timestamp", table_name="event_transfers")
    op.drop_table("event_transfers")

    op.drop_table("holders")
