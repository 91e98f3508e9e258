"""SQLModel implementation of the module catalog repository."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from ...errors import ConflictError
from ...models.module import Module
from ..database import SessionFactory


class SQLModelModuleRepository:
    """SQLModel-based module repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def list_all(self) -> list[Module]:
        with self.session_factory() as session:
            statement = select(Module).order_by(Module.display_order, Module.name)  # type: ignore[arg-type]
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def get_by_id(self, module_id: int) -> Optional[Module]:
        with self.session_factory() as session:
            obj = session.get(Module, module_id)
            if obj:
                session.expunge(obj)
            return obj

    def get_by_name(self, name: str) -> Optional[Module]:
        with self.session_factory() as session:
            obj = session.exec(select(Module).where(Module.name == name)).first()
            if obj:
                session.expunge(obj)
            return obj

    def create(self, module: Module) -> Module:
        try:
            with self.session_factory() as session:
                session.add(module)
                session.commit()
                session.refresh(module)
                session.expunge(module)
                return module
        except IntegrityError as exc:
            raise ConflictError(f"Module already exists: {module.name}") from exc


__all__ = ["SQLModelModuleRepository"]
