# /app/db/base.py

# Central registry for all SQLAlchemy models. Importing them here ensures the
# Base metadata knows about every table, both for `create_all` at startup and
# for Alembic's autogenerate scan.

from .base_class import Base

from .models.artwork_models import ArtworkGroup, Artwork
