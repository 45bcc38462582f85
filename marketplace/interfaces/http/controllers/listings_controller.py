# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify, request

from marketplace.application.use_cases.listings.create_listing import CreateListingUseCase
from marketplace.application.use_cases.listings.get_listing import GetListingUseCase
from marketplace.application.use_cases.listings.list_listings import (
    ListListingsUseCase,
    ListUserListingsUseCase,
)
from marketplace.domain.listings.policy import parse_listing_query
from marketplace.interfaces.http.dto.listings import (
    CreateListingRequestDTO,
    ListingDTO,
    ListingFeedItemDTO,
)
from marketplace.interfaces.http.security import login_required, session_optional
from marketplace.shared.errors import parse_payload
from marketplace.shared.logging import logger
from marketplace.shared.middleware.csrf import csrf_protect
from marketplace.shared.middleware.request_logger import current_request_context


class ListingsController:
    def __init__(
        self,
        *,
        create_use_case: CreateListingUseCase,
        get_use_case: GetListingUseCase,
        list_use_case: ListListingsUseCase,
        list_user_use_case: ListUserListingsUseCase,
    ) -> None:
        self._create_use_case = create_use_case
        self._get_use_case = get_use_case
        self._list_use_case = list_use_case
        self._list_user_use_case = list_user_use_case

    @csrf_protect
    @login_required
    def create(self) -> tuple[Response, int]:
        dto = parse_payload(CreateListingRequestDTO, request.get_json(silent=True))

        listing = self._create_use_case.execute(
            g.user_id, dto.to_draft(), ctx=current_request_context()
        )
        logger.info(f"listings.create: ok listing_id={listing.id}")
        return jsonify(ListingDTO.from_listing(listing).model_dump(mode="json")), 201

    def get(self, listing_id: int) -> tuple[Response, int]:
        listing = self._get_use_case.execute(listing_id)
        return jsonify(ListingDTO.from_listing(listing).model_dump(mode="json")), 200

    @session_optional
    def list_all(self) -> tuple[Response, int]:
        args = request.args
        query = parse_listing_query(
            limit=args.get("limit"),
            offset=args.get("offset"),
            sort=args.get("sort"),
            order=args.get("order"),
            min_price=args.get("min_price"),
            max_price=args.get("max_price"),
        )
        items = self._list_use_case.execute(query, viewer_id=g.user_id or 0)
        payload = [
            ListingFeedItemDTO(
                **ListingDTO.from_listing(item.listing).model_dump(), is_mine=item.is_mine
            ).model_dump(mode="json")
            for item in items
        ]
        return jsonify(payload), 200

    @login_required
    def list_mine(self) -> tuple[Response, int]:
        listings = self._list_user_use_case.execute(g.user_id)
        payload = [ListingDTO.from_listing(item).model_dump(mode="json") for item in listings]
        return jsonify(payload), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("listings", __name__, url_prefix="/api/v1/ad")
        bp.add_url_rule("/create", view_func=self.create, methods=["POST"])
        bp.add_url_rule("/all", view_func=self.list_all, methods=["GET"])
        bp.add_url_rule("/my", view_func=self.list_mine, methods=["GET"])
        bp.add_url_rule("/<int:listing_id>", view_func=self.get, methods=["GET"])
        return bp
