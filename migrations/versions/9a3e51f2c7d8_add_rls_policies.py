"""add_rls_policies

Revision ID: 9a3e51f2c7d8
Revises: 4c1d7e0a9b52
Create Date: 2026-09-14 11:40:05.902117

"""

from collections.abc import Sequence

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "9a3e51f2c7d8"
down_revision: str | Sequence[str] | None = "4c1d7e0a9b52"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Add Row Level Security policies for direct client connections.

    The API connects with a service role that bypasses RLS and applies the
    same ownership rules in the service layer.
    """
    for table in ["profiles", "payment_methods"]:
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;")

    # --- Profiles ---
    # Public pages are readable by anyone
    op.execute("""
        CREATE POLICY profile_select ON profiles
            FOR SELECT USING (true);
    """)
    op.execute("""
        CREATE POLICY profile_insert ON profiles
            FOR INSERT WITH CHECK (user_id = (SELECT auth.uid()));
    """)
    op.execute("""
        CREATE POLICY profile_update ON profiles
            FOR UPDATE USING (user_id = (SELECT auth.uid()));
    """)

    # --- Payment methods ---
    # Owners see everything they own; visitors see active methods only
    op.execute("""
        CREATE POLICY payment_method_select ON payment_methods
            FOR SELECT USING (
                active OR user_id = (SELECT auth.uid())
            );
    """)
    op.execute("""
        CREATE POLICY payment_method_insert ON payment_methods
            FOR INSERT WITH CHECK (user_id = (SELECT auth.uid()));
    """)
    op.execute("""
        CREATE POLICY payment_method_update ON payment_methods
            FOR UPDATE USING (user_id = (SELECT auth.uid()));
    """)
    op.execute("""
        CREATE POLICY payment_method_delete ON payment_methods
            FOR DELETE USING (user_id = (SELECT auth.uid()));
    """)


def downgrade() -> None:
    """Remove Row Level Security policies."""
    for policy in ["payment_method_delete", "payment_method_update", "payment_method_insert",
                   "payment_method_select"]:
        op.execute(f"DROP POLICY IF EXISTS {policy} ON payment_methods;")
    for policy in ["profile_update", "profile_insert", "profile_select"]:
        op.execute(f"DROP POLICY IF EXISTS {policy} ON profiles;")

    for table in ["payment_methods", "profiles"]:
        op.execute(f"ALTER TABLE {table} DISABLE ROW LEVEL SECURITY;")
