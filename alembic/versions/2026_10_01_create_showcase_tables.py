from alembic import op
import sqlalchemy as sa

revision = "2026_10_01_create_showcase_tables"
down_revision = None
branch_labels = None
depends_on = None

PROPERTY_TYPES = ("residential", "plot", "commercial", "offices")
PROPERTY_STATUSES = ("available", "sold", "reserved")
REFERRAL_SOURCES = ("FAMILY_FRIENDS", "WEBSITE", "YOUTUBE", "ADVERTISEMENT", "OTHER")


def timestamps():
    return [
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade():
    op.create_table(
        "properties",
        *timestamps(),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("slug", sa.String(200), unique=True),
        sa.Column("type", sa.Enum(*PROPERTY_TYPES, name="propertytype"), nullable=False),
        sa.Column("format", sa.String(100)),
        sa.Column("builder", sa.String(200), nullable=False),
        sa.Column("builder_rera_number", sa.String(100)),
        sa.Column("builder_rera_qr_code", sa.String(500)),
        sa.Column("description", sa.Text),
        sa.Column("price", sa.Numeric(14, 2)),
        sa.Column("location", sa.String(200)),
        sa.Column("location_advantages", sa.JSON, nullable=False),
        sa.Column(
            "status", sa.Enum(*PROPERTY_STATUSES, name="propertystatus"), nullable=False, server_default="available"
        ),
        sa.Column("main_image", sa.String(500)),
        sa.Column("images", sa.JSON, nullable=False),
        sa.Column("amenities", sa.JSON, nullable=False),
        sa.Column("map_image", sa.String(500)),
        sa.Column("project_launch_date", sa.DateTime(timezone=True)),
        sa.Column("possession", sa.String(100)),
        sa.Column("meta_title", sa.String(200)),
        sa.Column("meta_keywords", sa.String(500)),
        sa.Column("meta_description", sa.String(500)),
        sa.Column("bank_account_name", sa.String(200)),
        sa.Column("bank_name", sa.String(200)),
        sa.Column("bank_account_number", sa.String(50)),
        sa.Column("bank_ifsc", sa.String(20)),
        sa.Column("bank_branch", sa.String(200)),
    )
    op.create_index("ix_properties_builder", "properties", ["builder"])

    op.create_table(
        "property_configurations",
        *timestamps(),
        sa.Column("property_id", sa.Uuid, sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
        sa.Column("config_type", sa.String(100), nullable=False),
        sa.Column("carpet_area_sqft", sa.Numeric(12, 2)),
        sa.Column("price", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("floor_plan_image", sa.String(500)),
    )
    op.create_index("ix_property_configurations_property_id", "property_configurations", ["property_id"])

    op.create_table(
        "builders",
        *timestamps(),
        sa.Column("name", sa.String(200), nullable=False, unique=True),
        sa.Column("about", sa.Text),
    )

    op.create_table(
        "blogs",
        *timestamps(),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("slug", sa.String(200), nullable=False, unique=True),
        sa.Column("type", sa.Enum("TEXT", "VIDEO", name="blogtype"), nullable=False, server_default="TEXT"),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("excerpt", sa.String(500)),
        sa.Column("image", sa.String(500)),
        sa.Column("video_url", sa.String(500)),
        sa.Column("video_thumbnail", sa.String(500)),
        sa.Column("meta_title", sa.String(200)),
        sa.Column("meta_keywords", sa.String(500)),
        sa.Column("meta_description", sa.String(500)),
        sa.Column("published", sa.Boolean, nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_blogs_published", "blogs", ["published"])

    op.create_table(
        "videos",
        *timestamps(),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("video_link", sa.String(500), nullable=False),
        sa.Column("thumbnail", sa.String(500)),
        sa.Column("description", sa.Text),
        sa.Column("order", sa.Integer, nullable=False, server_default="0"),
    )

    op.create_table(
        "enquiries",
        *timestamps(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("phone", sa.String(20)),
        sa.Column("message", sa.Text, nullable=False),
        sa.Column("type", sa.String(50), nullable=False, server_default="contact"),
        sa.Column("property_id", sa.Uuid),
    )
    op.create_index("ix_enquiries_type", "enquiries", ["type"])

    op.create_table(
        "career_applications",
        *timestamps(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("whatsapp_number", sa.String(20), nullable=False),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("referral_source", sa.Enum(*REFERRAL_SOURCES, name="referralsource"), nullable=False),
        sa.Column("referral_other", sa.String(200)),
        sa.Column("resume_link", sa.String(1000), nullable=False),
    )

    op.create_table(
        "tac_registrations",
        *timestamps(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("phone", sa.String(20), nullable=False),
        sa.Column("address", sa.Text),
    )

    op.create_table(
        "email_subscriptions",
        *timestamps(),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
    )

    op.create_table(
        "page_stats",
        *timestamps(),
        sa.Column("page_name", sa.String(100), nullable=False, unique=True),
        sa.Column("click_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("last_clicked", sa.DateTime(timezone=True)),
    )


def downgrade():
    op.drop_table("page_stats")
    op.drop_table("email_subscriptions")
    op.drop_table("tac_registrations")
    op.drop_table("career_applications")
    op.drop_index("ix_enquiries_type", "enquiries")
    op.drop_table("enquiries")
    op.drop_table("videos")
    op.drop_index("ix_blogs_published", "blogs")
    op.drop_table("blogs")
    op.drop_table("builders")
    op.drop_index("ix_property_configurations_property_id", "property_configurations")
    op.drop_table("property_configurations")
    op.drop_index("ix_properties_builder", "properties")
    op.drop_table("properties")
    for enum_name in ("referralsource", "blogtype", "propertystatus", "propertytype"):
        op.execute(f"DROP TYPE IF EXISTS {enum_name}")
