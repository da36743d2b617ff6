"""Module: base."""

from sqlalchemy.orm import DeclarativeBase


# Declarative base shared by every PetCare table; create_all() walks its metadata.
class Base(DeclarativeBase):
    pass
