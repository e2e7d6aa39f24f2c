"""
Staking projector.

Projects validator creation into three independent records: the validator
identity, its description and its commission.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from ledgerview.address import encode_address
from ledgerview.codec.pubkey import unpack_pubkey
from ledgerview.config import AddressPrefixes
from ledgerview.messages import MsgCreateValidator
from ledgerview.models.staking import Validator, ValidatorCommission, ValidatorDescription
from ledgerview.projectors.base import DomainProjector, Route

if TYPE_CHECKING:
    from ledgerview.keybase import AvatarResolver
    from ledgerview.messages import Message
    from ledgerview.persistence.store import StateSink
    from ledgerview.tx import Tx


class StakingProjector(DomainProjector):
    """
    Projects validator creation messages.

    Example:
        projector = StakingProjector(sink, prefixes, KeybaseAvatarResolver())
        projector.store_validator_from_msg_create_validator(tx.height, msg)
    """

    MODULE = "staking"

    def __init__(
        self,
        sink: StateSink,
        prefixes: AddressPrefixes | None,
        avatars: AvatarResolver,
        logger: Any = None,
    ) -> None:
        super().__init__(sink, prefixes, logger)
        self.avatars = avatars

    def routes(self) -> dict[type[Message], Route]:
        return {
            MsgCreateValidator: lambda index, msg, tx: self._handle_create_validator(msg, tx),
        }

    def _handle_create_validator(self, msg: MsgCreateValidator, tx: Tx) -> None:
        self.store_validator_from_msg_create_validator(tx.height, msg)

    def store_validator_from_msg_create_validator(self, height: int, msg: MsgCreateValidator) -> None:
        """
        Store the validator, description and commission declared by a MsgCreateValidator.

        Every decode and the avatar lookup happen before the first write, so
        a failure there leaves the store untouched. The three writes are
        sequential; a sink failure stops the remaining ones, and replaying
        the message completes them.

        Raises:
            PubKeyDecodeError: If the consensus key type is unsupported or malformed
            AvatarLookupError: If the avatar lookup fails
            AddressDecodeError: If an address cannot be re-encoded
        """
        subject = f"validator {msg.validator_address}"
        with self.decoding("consensus pubkey", height, subject):
            pubkey = unpack_pubkey(msg.pubkey)
        avatar_url = self.avatars.get_avatar_url(msg.description.identity)

        with self.decoding("consensus address", height, subject):
            consensus_address = encode_address(self.prefixes.validator_consensus, pubkey.address())
        with self.decoding("operator address", height, subject):
            operator_address = self.to_operator_address(msg.validator_address)
        with self.decoding("delegator address", height, subject):
            self_delegate_address = self.to_account_address(msg.delegator_address)

        self.sink.save_validator_data(
            Validator(
                consensus_address=consensus_address,
                operator_address=operator_address,
                consensus_pubkey=str(pubkey),
                self_delegate_address=self_delegate_address,
                max_change_rate=msg.commission.max_change_rate,
                max_rate=msg.commission.max_rate,
                height=height,
            )
        )
        self.sink.save_validator_description(
            ValidatorDescription(
                operator_address=operator_address,
                description=msg.description,
                avatar_url=avatar_url,
                height=height,
            )
        )
        self.sink.save_validator_commission(
            ValidatorCommission(
                operator_address=operator_address,
                commission=msg.commission.rate,
                min_self_delegation=msg.min_self_delegation,
                height=height,
            )
        )

        self.logger.info(
            "validator_created",
            height=height,
            operator_address=operator_address,
            consensus_address=consensus_address,
            moniker=msg.description.moniker,
        )

    def store_validators_from_gentxs(self, height: int, messages: Iterable[MsgCreateValidator]) -> int:
        """
        Replay the MsgCreateValidator messages of genesis transactions.

        Stops at the first failure.

        Returns:
            Number of validators stored
        """
        count = 0
        for msg in messages:
            self.store_validator_from_msg_create_validator(height, msg)
            count += 1
        return count
