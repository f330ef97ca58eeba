# File: gameframe/core/database/base.py

from sqlalchemy.orm import declarative_base

# The shared registry. All feature models (KeyMoment, Transcript) inherit from this.
Base = declarative_base()
