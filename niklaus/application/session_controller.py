"""
Per-user session controller.

Composes identity resolution, live sync, entity authorization, the cart and
the support chat into one explicit SessionState. Every identity change bumps
an epoch; results of awaits started under an older epoch are dropped.
"""

import asyncio
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar

from niklaus.config import get_logger, get_settings
from niklaus.core.entities import (
    AuthIdentity,
    Cart,
    ChatState,
    CollectionKind,
    Entity,
    Order,
    Product,
    Profile,
    ProfileSeed,
    SessionState,
    SupportChat,
    View,
)
from niklaus.core.exceptions import (
    AccessDenied,
    ConfigurationError,
    NotAuthenticatedError,
    ProductNotFoundError,
    ValidationError,
)
from niklaus.core.interfaces import (
    IAuthProvider,
    ICatalogAdmin,
    IInferenceProvider,
    ILiveCollectionFeed,
    IOrderWriter,
    IProfileStore,
)
from niklaus.core.services import (
    CartEngine,
    EntityAccessGuard,
    IdentityResolver,
    LiveCollectionSync,
    SupportChatSession,
)

logger = get_logger(__name__)


@dataclass
class BackofficeContent:
    """Admin-only view model: every entity and product."""

    entities: list[Entity] = field(default_factory=list)
    products: list[Product] = field(default_factory=list)


NamedRecord = TypeVar("NamedRecord", Entity, Product)


def _sorted_by_name(records: Iterable[NamedRecord]) -> list[NamedRecord]:
    return sorted(records, key=lambda r: (r.name.casefold(), r.id))


class AppSessionController:
    """
    One signed-in user's session.

    Collaborators are injected; the controller owns the SessionState value
    and replaces it wholesale on every transition.
    """

    def __init__(
        self,
        auth: IAuthProvider,
        profile_store: IProfileStore,
        feed: ILiveCollectionFeed,
        order_writer: IOrderWriter,
        inference: IInferenceProvider,
        catalog_admin: ICatalogAdmin | None = None,
    ):
        self._auth = auth
        self._resolver = IdentityResolver(profile_store)
        self._live = LiveCollectionSync(feed)
        self._cart_engine = CartEngine(order_writer)
        self._support = SupportChatSession(inference)
        self._catalog_admin = catalog_admin

        self._state = SessionState()
        self._identity_uid: str | None = None
        self._epoch = 0
        self._auth_lock = asyncio.Lock()
        self._auth_listener: asyncio.Task[None] | None = None
        self._remove_snapshot_listener = self._live.on_change(self._on_snapshot)

    # =========================================================================
    # Read models
    # =========================================================================

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def live(self) -> LiveCollectionSync:
        return self._live

    @property
    def profile(self) -> Profile | None:
        return self._state.profile

    @property
    def greeting(self) -> str | None:
        """Greeting shown above an empty support transcript."""
        if self._state.chat.turns:
            return None
        return get_settings().support.greeting

    def _require_profile(self, operation: str) -> Profile:
        profile = self._state.profile
        if profile is None:
            raise NotAuthenticatedError(operation)
        return profile

    def _require_admin(self, operation: str) -> Profile:
        profile = self._require_profile(operation)
        if not profile.is_admin:
            logger.warning("backoffice_denied", profile_id=profile.id, operation=operation)
            raise AccessDenied("backoffice", operation)
        return profile

    def _update(self, **changes: Any) -> SessionState:
        self._state = self._state.model_copy(update=changes)
        return self._state

    # =========================================================================
    # Identity
    # =========================================================================

    async def handle_auth_event(self, identity: AuthIdentity | None) -> SessionState:
        """
        Apply an identity change.

        A new identity tears down the previous session first, then resolves
        the profile and starts live sync. None tears down only.
        """
        async with self._auth_lock:
            uid = identity.uid if identity is not None else None
            if uid == self._identity_uid and (uid is None or self._state.profile is not None):
                return self._state

            self._epoch += 1
            await self._teardown()
            self._identity_uid = uid

            if identity is None:
                logger.info("session_signed_out", epoch=self._epoch)
                return self._state

            profile = await self._resolver.resolve(identity)
            if profile is None:
                logger.warning("session_without_profile", uid=uid)
                return self._state

            self._state = SessionState(profile=profile)

            try:
                await self._live.start()
            except Exception as e:
                logger.error("live_sync_unavailable", profile_id=profile.id, error=str(e))

            logger.info(
                "session_started",
                profile_id=profile.id,
                role=profile.role.value,
                entities=len(profile.entity_ids),
                epoch=self._epoch,
            )
            return self._state

    async def _teardown(self) -> None:
        await self._live.stop()
        self._state = SessionState()

    async def run_auth_listener(self) -> None:
        """Follow the auth provider's identity stream until cancelled."""
        async for identity in self._auth.identity_events():
            try:
                await self.handle_auth_event(identity)
            except Exception as e:
                logger.error("auth_event_failed", error=str(e), error_type=type(e).__name__)

    def start_auth_listener(self) -> asyncio.Task[None]:
        if self._auth_listener is None or self._auth_listener.done():
            self._auth_listener = asyncio.create_task(self.run_auth_listener(), name="auth-listener")
        return self._auth_listener

    async def sign_in(self, email: str, password: str) -> SessionState:
        identity = await self._auth.sign_in(email, password)
        return await self.handle_auth_event(identity)

    async def register(
        self,
        email: str,
        password: str,
        name: str,
        category: str | None = None,
    ) -> SessionState:
        """Create credentials; the profile is seeded from name and category."""
        seed = ProfileSeed(name=name, category=category)
        identity = await self._auth.register(email, password, seed)
        return await self.handle_auth_event(identity)

    async def sign_out(self) -> SessionState:
        await self._auth.sign_out()
        return await self.handle_auth_event(None)

    async def close(self) -> None:
        """Stop the auth listener and live sync."""
        if self._auth_listener is not None:
            self._auth_listener.cancel()
            await asyncio.gather(self._auth_listener, return_exceptions=True)
            self._auth_listener = None
        self._remove_snapshot_listener()
        await self._live.stop()

    # =========================================================================
    # Live snapshot wiring
    # =========================================================================

    def _on_snapshot(self, kind: CollectionKind, records: Mapping[str, Any]) -> None:
        profile = self._state.profile
        if profile is None:
            return

        if kind == CollectionKind.ENTITIES:
            visible = EntityAccessGuard.visible_entities(profile, records.values())
            selection = EntityAccessGuard.refresh(self._state.selection, visible)
            if selection is not self._state.selection:
                self._update(selection=selection)

        elif kind == CollectionKind.PRODUCTS:
            cart = CartEngine.reconcile(self._state.cart, records)
            if cart is not self._state.cart:
                self._update(cart=cart)

    # =========================================================================
    # Views
    # =========================================================================

    def set_view(self, view: View | str) -> SessionState:
        self._require_profile("set_view")
        return self._update(view=View(view))

    def backoffice_content(self) -> BackofficeContent | None:
        """Admin view model; None for everyone else."""
        profile = self._state.profile
        if profile is None or not profile.is_admin:
            return None
        return BackofficeContent(
            entities=_sorted_by_name(self._live.entities.values()),
            products=_sorted_by_name(self._live.products.values()),
        )

    def catalog(self) -> list[Product]:
        """
        Products available to the selected entity.

        Raises:
            ValidationError: No entity selected, or the chooser is open
        """
        self._require_profile("catalog")
        if self._state.selection.needs_selection:
            raise ValidationError("entity", "Select an entity to browse the catalog")
        return _sorted_by_name(self._live.products.values())

    def order_history(self, entity_id: str | None = None) -> list[Order]:
        profile = self._require_profile("order_history")
        return EntityAccessGuard.visible_orders(profile, self._live.orders, entity_id)

    # =========================================================================
    # Entity selection
    # =========================================================================

    def visible_entities(self) -> list[Entity]:
        profile = self._require_profile("visible_entities")
        return EntityAccessGuard.visible_entities(profile, self._live.entities.values())

    def select_entity(self, entity_id: str) -> SessionState:
        """
        Select an entity to act as.

        Raises:
            AccessDenied: Entity is not visible to this profile
        """
        entity = EntityAccessGuard.select_entity(entity_id, self.visible_entities())
        logger.info("entity_selected", profile_id=self._state.profile.id, entity_id=entity.id)
        return self._update(selection=EntityAccessGuard.choose(entity))

    def open_entity_chooser(self) -> SessionState:
        self._require_profile("open_entity_chooser")
        return self._update(selection=EntityAccessGuard.open_chooser(self._state.selection))

    # =========================================================================
    # Cart
    # =========================================================================

    def _require_cart_editable(self, operation: str) -> None:
        self._require_profile(operation)
        if self._state.submitting:
            raise ValidationError("cart", "An order submission is in progress")

    def add_to_cart(self, product_id: str) -> Cart:
        """
        Add a catalog product to the cart.

        Raises:
            ProductNotFoundError: Product is not in the live catalog
            ValidationError: No entity selected, product unavailable, or a
                submission is in flight
        """
        self._require_cart_editable("add_to_cart")
        if self._state.selection.needs_selection:
            raise ValidationError("entity", "Select an entity before adding products")

        product = self._live.products.get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        if not product.available:
            raise ValidationError("product_id", "Product is unavailable", product_id)

        return self._update(cart=CartEngine.add(self._state.cart, product)).cart

    def adjust_quantity(self, product_id: str, delta: int) -> Cart:
        self._require_cart_editable("adjust_quantity")
        return self._update(cart=CartEngine.adjust_quantity(self._state.cart, product_id, delta)).cart

    def remove_from_cart(self, product_id: str) -> Cart:
        self._require_cart_editable("remove_from_cart")
        return self._update(cart=CartEngine.remove(self._state.cart, product_id)).cart

    def clear_cart(self) -> Cart:
        self._require_cart_editable("clear_cart")
        return self._update(cart=CartEngine.clear(self._state.cart)).cart

    async def submit_order(self) -> Order:
        """
        Submit the cart for the selected entity.

        The entity and cart are captured when the call starts; switching
        entity meanwhile does not affect this order.

        Raises:
            ValidationError: Empty cart, no entity, or already submitting
            OrderWriteError: Write failed; the cart is kept
        """
        profile = self._require_profile("submit_order")
        if self._state.submitting:
            raise ValidationError("order", "An order submission is already in progress")

        epoch = self._epoch
        entity = self._state.selection.selected
        cart = self._state.cart
        CartEngine.validate_submission(cart, entity)

        self._update(submitting=True)
        try:
            result = await self._cart_engine.submit(cart, entity, profile, self._live.products)
        except BaseException:
            if epoch == self._epoch:
                self._update(submitting=False)
            raise

        if epoch != self._epoch:
            logger.info("stale_submit_result_dropped", order_id=result.order.id)
            return result.order

        self._update(submitting=False, cart=result.cart)
        return result.order

    # =========================================================================
    # Support chat
    # =========================================================================

    async def send_support_message(self, text: str) -> SupportChat:
        """
        Send a support message and wait for the assistant turn.

        Raises:
            ValidationError: Blank text, or a reply is still pending
        """
        self._require_profile("send_support_message")
        epoch = self._epoch

        accepted = self._support.accept(self._state.chat, text)
        self._update(chat=accepted)

        try:
            replied = await self._support.respond(accepted)
        except BaseException:
            if epoch == self._epoch:
                self._update(chat=accepted.with_state(ChatState.IDLE))
            raise

        if epoch != self._epoch:
            logger.info("stale_support_reply_dropped", epoch=epoch)
            return self._state.chat

        return self._update(chat=replied).chat

    # =========================================================================
    # Backoffice
    # =========================================================================

    def _require_catalog_admin(self) -> ICatalogAdmin:
        if self._catalog_admin is None:
            raise ConfigurationError("No catalog admin collaborator configured")
        return self._catalog_admin

    async def upsert_entity(self, entity: Entity) -> Entity:
        profile = self._require_admin("upsert_entity")
        await self._require_catalog_admin().upsert_entity(entity)
        logger.info("entity_upserted", profile_id=profile.id, entity_id=entity.id)
        return entity

    async def upsert_product(self, product: Product) -> Product:
        profile = self._require_admin("upsert_product")
        await self._require_catalog_admin().upsert_product(product)
        logger.info("product_upserted", profile_id=profile.id, product_id=product.id)
        return product
