"""
Aptos fullnode REST client.

A thin transport for the few calls needed to build and submit BCS signed
transactions: ledger info, account sequence numbers and balances,
submission, and transaction lookup. A failed request is reported, never
retried; only a transaction that is still pending is looked up again.

Example:
    ```python
    with RestClient(ClientConfig.for_network(Network.DEVNET)) as client:
        signed = client.create_bcs_signed_transaction(account, payload)
        pending = client.submit_bcs_transaction(signed)
        committed = client.wait_for_transaction(pending["hash"])
    ```
"""

from __future__ import annotations
from typing import Optional, Dict, Any, Union
import logging
import time

import requests

from .accounts.base import Account
from .config import ClientConfig
from .core.address import AccountAddress
from .runtime.errors import (
    NetworkError,
    TransactionFailedError,
    TransactionTimeoutError,
    error_from_response,
)
from .tx.raw_transaction import RawTransaction
from .tx.signed_transaction import SIGNED_TRANSACTION_CONTENT_TYPE, SignedTransaction
from .types.payload import TransactionPayload

logger = logging.getLogger(__name__)

APTOS_COIN_TYPE = "0x1::aptos_coin::AptosCoin"
PENDING_TRANSACTION_TYPE = "pending_transaction"


class RestClient:
    """
    Client for the fullnode ``/v1`` REST API.

    Accepts a ``ClientConfig`` or a bare fullnode URL.
    """

    def __init__(
        self,
        config: Union[ClientConfig, str],
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the client.

        Args:
            config: Client configuration, or a fullnode base URL
            session: Optional requests.Session for connection pooling
        """
        if isinstance(config, str):
            config = ClientConfig(fullnode_url=config)
        self._config = config
        self._base_url = config.api_url
        self._session = session or requests.Session()
        self._owns_session = session is None
        self._chain_id: Optional[int] = None

        if config.log_level:
            logging.getLogger("aptos_client").setLevel(config.log_level)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def base_url(self) -> str:
        """Get the API base URL, including ``/v1``."""
        return self._base_url

    def close(self) -> None:
        """Close the HTTP session if owned by this client."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> RestClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # =========================================================================
    # Low-level HTTP
    # =========================================================================

    def _request(self, method: str, path: str, **kwargs) -> Any:
        """
        Send one request and decode the JSON response.

        Args:
            method: HTTP method
            path: Path below the ``/v1`` base URL
            **kwargs: Passed to ``requests.Session.request``

        Returns:
            Decoded JSON body

        Raises:
            NetworkError: If the request could not be completed
            ApiError: If the node answered with a non-2xx status
        """
        url = f"{self._base_url}{path}"
        logger.debug(f"{method} {url}")

        try:
            response = self._session.request(method, url, timeout=self._config.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"HTTP request failed: {e}", details={"url": url}, cause=e)

        if not 200 <= response.status_code < 300:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            logger.warning(f"{method} {url} returned HTTP {response.status_code}")
            raise error_from_response(response.status_code, body)

        try:
            return response.json()
        except ValueError as e:
            raise NetworkError(f"Invalid JSON response: {e}", details={"url": url}, cause=e)

    # =========================================================================
    # Ledger and accounts
    # =========================================================================

    def get_ledger_info(self) -> Dict[str, Any]:
        """Get the current ledger state (chain id, epoch, version, ...)."""
        return self._request("GET", "")

    def get_chain_id(self) -> int:
        """
        Get the chain id of the connected network.

        The value is fetched once and cached.
        """
        if self._chain_id is None:
            self._chain_id = int(self.get_ledger_info()["chain_id"])
        return self._chain_id

    def get_account(self, address: Union[AccountAddress, str]) -> Dict[str, Any]:
        """
        Get an account's sequence number and authentication key.

        Args:
            address: Account address

        Returns:
            Account resource as returned by the node
        """
        if isinstance(address, str):
            address = AccountAddress.from_str_relaxed(address)
        return self._request("GET", f"/accounts/{address}")

    def get_sequence_number(self, address: Union[AccountAddress, str]) -> int:
        """Get the next sequence number for ``address``."""
        return int(self.get_account(address)["sequence_number"])

    def get_account_coin_amount(
        self,
        address: Union[AccountAddress, str],
        asset_type: str = APTOS_COIN_TYPE,
    ) -> int:
        """
        Get an account's balance of a coin or fungible asset.

        Args:
            address: Account address
            asset_type: Coin type tag or fungible asset metadata address

        Returns:
            Balance in the asset's smallest unit
        """
        if isinstance(address, str):
            address = AccountAddress.from_str_relaxed(address)
        return int(self._request("GET", f"/accounts/{address}/balance/{asset_type}"))

    # =========================================================================
    # Transactions
    # =========================================================================

    def submit_bcs_transaction(self, signed_transaction: SignedTransaction) -> Dict[str, Any]:
        """
        Submit a signed transaction in BCS form.

        Args:
            signed_transaction: Transaction to submit

        Returns:
            Pending transaction, including its ``hash``
        """
        return self._request(
            "POST",
            "/transactions",
            data=signed_transaction.to_bytes(),
            headers={"Content-Type": SIGNED_TRANSACTION_CONTENT_TYPE},
        )

    def get_transaction_by_hash(self, txn_hash: str) -> Dict[str, Any]:
        """Look up a pending or committed transaction."""
        return self._request("GET", f"/transactions/by_hash/{txn_hash}")

    def wait_for_transaction(
        self,
        txn_hash: str,
        max_attempts: int = 10,
        poll_interval: float = 2.0,
    ) -> Dict[str, Any]:
        """
        Wait until a submitted transaction is committed.

        Each lookup asks the node to hold the request open with ``wait=true``;
        while the transaction is still pending the client sleeps
        ``poll_interval`` seconds and asks again.

        Args:
            txn_hash: Hash returned on submission
            max_attempts: Maximum number of lookups
            poll_interval: Seconds between lookups

        Returns:
            The committed transaction

        Raises:
            TransactionTimeoutError: If the transaction is still pending after ``max_attempts`` lookups
            TransactionFailedError: If the transaction was committed but did not succeed
        """
        for attempt in range(1, max_attempts + 1):
            txn = self._request("GET", f"/transactions/by_hash/{txn_hash}", params={"wait": "true"})
            if txn.get("type") != PENDING_TRANSACTION_TYPE:
                if not txn.get("success", False):
                    vm_status = txn.get("vm_status")
                    logger.warning(f"Transaction {txn_hash} failed: {vm_status}")
                    raise TransactionFailedError(
                        f"Transaction {txn_hash} failed: {vm_status}",
                        vm_status=vm_status,
                        details={"hash": txn_hash},
                    )
                logger.info(f"Transaction {txn_hash} committed at version {txn.get('version')}")
                return txn

            logger.debug(f"Transaction {txn_hash} pending (attempt {attempt}/{max_attempts})")
            if attempt < max_attempts:
                time.sleep(poll_interval)

        raise TransactionTimeoutError(
            f"Transaction {txn_hash} still pending after {max_attempts} attempts",
            details={"hash": txn_hash, "attempts": max_attempts},
        )

    def create_bcs_transaction(
        self,
        sender: Account,
        payload: TransactionPayload,
        sequence_number: Optional[int] = None,
    ) -> RawTransaction:
        """
        Build a raw transaction with the configured gas and expiration.

        Args:
            sender: Sending account
            payload: Transaction payload
            sequence_number: Sequence number to use; fetched from the node when omitted

        Returns:
            Unsigned transaction for the connected chain
        """
        if sequence_number is None:
            sequence_number = self.get_sequence_number(sender.address())
        return RawTransaction.create(
            sender.address(),
            sequence_number,
            payload,
            self.get_chain_id(),
            max_gas_amount=self._config.max_gas_amount,
            gas_unit_price=self._config.gas_unit_price,
            expiration_ttl=self._config.expiration_ttl,
        )

    def create_bcs_signed_transaction(
        self,
        sender: Account,
        payload: TransactionPayload,
        sequence_number: Optional[int] = None,
    ) -> SignedTransaction:
        """Build a raw transaction and sign it with ``sender``."""
        raw_txn = self.create_bcs_transaction(sender, payload, sequence_number)
        return SignedTransaction(raw_txn, sender.sign_transaction_with_authenticator(raw_txn))
