from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "2026_10_19_create_properties_and_notes"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "properties",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("address", sa.Text, nullable=False),
        sa.Column("latitude", sa.Float, nullable=False),
        sa.Column("longitude", sa.Float, nullable=False),
        sa.Column("nominatim_data", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("latitude BETWEEN -90 AND 90", name="ck_properties_latitude"),
        sa.CheckConstraint("longitude BETWEEN -180 AND 180", name="ck_properties_longitude"),
    )
    op.create_index("ix_properties_created_at", "properties", ["created_at"])

    op.create_table(
        "notes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("property_id", sa.Integer, sa.ForeignKey("properties.id"), nullable=False),
        sa.Column("note", sa.Text, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_notes_property_id_created_at", "notes", ["property_id", "created_at"])


def downgrade():
    op.drop_index("ix_notes_property_id_created_at", "notes")
    op.drop_table("notes")
    op.drop_index("ix_properties_created_at", "properties")
    op.drop_table("properties")
