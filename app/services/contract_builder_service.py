"""Persistence boundary for the contract builder.

Loading, custom part creation and saving never raise on store errors: they
roll back, log, and hand back a sentinel (``None``, the unchanged state, or
``False``) so callers decide whether to retry.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from app.builder import state as builder
from app.builder.state import BuilderState
from app.compiler import compile_content_with_data
from app.core.exceptions import NotFoundError, ValidationError
from app.core.logging import LogContext, build_log_event
from app.models import Contract, ContractPart, ContractPartLink
from app.services.base_service import BaseService
from app.services.contract_part_service import ContractPartService
from app.services.related_data_service import RelatedDataService

logger = logging.getLogger(__name__)


class ContractBuilderService(BaseService):
    """Load, extend and save builder state against the relational store."""

    def _get_contract(self, contract_id: int) -> Contract | None:
        return self.db.query(Contract).filter(Contract.id == contract_id).first()

    def fetch_contract_parts(self, contract_id: int) -> list[dict[str, Any]]:
        """Linked parts in render order, flattened with their link fields."""
        links = (
            self.db.query(ContractPartLink)
            .filter(ContractPartLink.contract_id == contract_id)
            .order_by(ContractPartLink.order_index.asc())
            .all()
        )
        return [
            {
                "id": link.part.id,
                "title": link.part.title,
                "content": link.part.content if link.custom_content is None else link.custom_content,
                "is_required": link.part.is_required,
                "sort_order": link.part.sort_order,
                "order_index": link.order_index,
                "is_included": link.is_included,
                "custom_content": link.custom_content,
            }
            for link in links
        ]

    def load_initial_data(self, contract_id: int | None = None) -> BuilderState | None:
        try:
            available = ContractPartService(db=self.db).list_parts()
            state = builder.new_state(contract_id=contract_id)
            linked = None
            if contract_id is not None:
                contract = self._get_contract(contract_id)
                if contract is None:
                    logger.warning(
                        "contract_builder.load.contract_missing",
                        extra={"event": "contract_builder.load.contract_missing", "contract_id": contract_id},
                    )
                    return None
                state = replace(state, title=contract.title)
                linked = self.fetch_contract_parts(contract_id)
            return builder.load_template(state, available, linked)
        except SQLAlchemyError:
            self.rollback()
            logger.exception(
                "contract_builder.load.failed",
                extra={"event": "contract_builder.load.failed", "contract_id": contract_id},
            )
            return None

    def add_custom_part(self, state: BuilderState) -> BuilderState:
        try:
            part = ContractPartService(db=self.db).create_custom_part()
        except SQLAlchemyError:
            logger.exception(
                "contract_builder.custom_part.failed",
                extra={"event": "contract_builder.custom_part.failed", "contract_id": state.contract_id},
            )
            return state
        return builder.add_custom_part(state, part)

    def save_contract(
        self,
        state: BuilderState,
        contract_data: Mapping[str, Any] | None = None,
        related_data: Mapping[str, Any] | None = None,
    ) -> Contract | bool:
        """Write compiled content and the part ordering in one transaction.

        Without a data bundle the stored content is the plain preview. Join
        rows are reconciled against the state's order rather than replaced.
        """
        if state.contract_id is None:
            logger.warning("contract_builder.save.no_contract", extra={"event": "contract_builder.save.no_contract"})
            return False

        if contract_data is None and related_data is None:
            content = builder.compiled_content(state)
        else:
            content = builder.compile_with_data(state, contract_data, related_data)

        try:
            contract = self._get_contract(state.contract_id)
            if contract is None:
                raise NotFoundError(f"Contract {state.contract_id} not found")

            contract.content = content
            if state.title.strip():
                contract.title = state.title
            rows = self._apply_part_edits(state)
            self._reconcile_links(contract, state, rows)
            self.commit()
        except (SQLAlchemyError, NotFoundError):
            self.rollback()
            logger.exception(
                "contract_builder.save.failed",
                extra={"event": "contract_builder.save.failed", "contract_id": state.contract_id},
            )
            return False

        self.db.refresh(contract)
        logger.info(
            "contract_builder.save.succeeded",
            extra={
                "event": "contract_builder.save.succeeded",
                "contract_id": contract.id,
                "part_count": len(state.parts),
            },
        )
        return contract

    def _apply_part_edits(self, state: BuilderState) -> dict[int, ContractPart]:
        """Write title edits to library rows and return the rows by id.

        Content edits stay on the contract's link; library content is shared.
        """
        ids = state.part_ids()
        if not ids:
            return {}
        rows = {row.id: row for row in self.db.query(ContractPart).filter(ContractPart.id.in_(ids)).all()}
        missing = [part_id for part_id in ids if part_id not in rows]
        if missing:
            raise NotFoundError(f"Contract parts not found: {missing}")

        for part in state.parts:
            row = rows[part.id]
            if row.title != part.title:
                row.title = part.title
        return rows

    def _reconcile_links(self, contract: Contract, state: BuilderState, rows: Mapping[int, ContractPart]) -> None:
        desired = {part.id: index for index, part in enumerate(state.parts)}
        existing = {link.contractpart_id: link for link in contract.part_links}

        for part_id, link in existing.items():
            if part_id not in desired:
                contract.part_links.remove(link)
        self.db.flush()

        # Park moved rows on negative indices so (contract_id, order_index)
        # stays unique while the new positions are written.
        moved = [
            link
            for part_id, link in existing.items()
            if part_id in desired and link.order_index != desired[part_id]
        ]
        for offset, link in enumerate(moved, start=1):
            link.order_index = -offset
        self.db.flush()

        for link in moved:
            link.order_index = desired[link.contractpart_id]
        for part in state.parts:
            custom_content = None if part.content == rows[part.id].content else part.content
            link = existing.get(part.id)
            if link is None:
                contract.part_links.append(
                    ContractPartLink(
                        contractpart_id=part.id,
                        order_index=desired[part.id],
                        is_included=part.is_included,
                        custom_content=custom_content,
                    )
                )
            else:
                link.is_included = part.is_included
                link.custom_content = custom_content
        self.db.flush()

    def clone_contract_parts(
        self,
        source_contract_id: int,
        target_contract_id: int,
    ) -> list[dict[str, Any]] | None | bool:
        """Replace the target's part links with copies of the source's.

        Order, inclusion and custom content are copied; indices are rewritten
        as ``0..n-1``. Returns the target's parts, None when either contract
        is missing, or False when the store fails.
        """
        if source_contract_id == target_contract_id:
            raise ValidationError("Source and target contracts must differ")

        try:
            source = self._get_contract(source_contract_id)
            target = self._get_contract(target_contract_id)
            if source is None or target is None:
                logger.warning(
                    "contract_builder.clone.contract_missing",
                    extra={
                        "event": "contract_builder.clone.contract_missing",
                        "source_contract_id": source_contract_id,
                        "target_contract_id": target_contract_id,
                    },
                )
                return None

            target.part_links.clear()
            self.db.flush()
            for index, link in enumerate(sorted(source.part_links, key=lambda row: row.order_index)):
                target.part_links.append(
                    ContractPartLink(
                        contractpart_id=link.contractpart_id,
                        order_index=index,
                        is_included=link.is_included,
                        custom_content=link.custom_content,
                    )
                )
            self.commit()
        except SQLAlchemyError:
            self.rollback()
            logger.exception(
                "contract_builder.clone.failed",
                extra={"event": "contract_builder.clone.failed", "target_contract_id": target_contract_id},
            )
            return False

        parts = self.fetch_contract_parts(target_contract_id)
        logger.info(
            "contract_builder.clone.succeeded",
            extra={
                "event": "contract_builder.clone.succeeded",
                "source_contract_id": source_contract_id,
                "target_contract_id": target_contract_id,
                "part_count": len(parts),
            },
        )
        return parts


    def compile_contract(self, contract_id: int, framed: bool = False) -> str | None:
        """Compile a stored contract with its own fields and related records."""
        contract = self._get_contract(contract_id)
        if contract is None:
            return None

        parts = [part for part in self.fetch_contract_parts(contract_id) if part["is_included"]]
        related = RelatedDataService(db=self.db).fetch_related_data(contract)
        html = compile_content_with_data(parts, contract.template_fields(), related, framed=framed)
        logger.info(
            "contract_builder.compiled",
            extra=build_log_event(
                "contract_builder.compiled",
                LogContext(contract_id=contract_id, actor="compiler"),
                part_count=len(parts),
                framed=framed,
            ),
        )
        return html
