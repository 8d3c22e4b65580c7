from dataclasses import dataclass

from eth_typing import ChecksumAddress
from web3 import Web3

MAINNET = 'mainnet'
HOODI = 'hoodi'
GNOSIS = 'gnosis'
SEPOLIA = 'sepolia'

AVAILABLE_NETWORKS = [MAINNET, HOODI, GNOSIS, SEPOLIA]


@dataclass
class NetworkConfig:
    GENESIS_FORK_VERSION: bytes
    DEPOSIT_CONTRACT_ADDRESS: ChecksumAddress


NETWORKS: dict[str, NetworkConfig] = {
    MAINNET: NetworkConfig(
        GENESIS_FORK_VERSION=Web3.to_bytes(hexstr='0x00000000'),
        DEPOSIT_CONTRACT_ADDRESS=Web3.to_checksum_address(
            '0x00000000219ab540356cBB839Cbe05303d7705Fa'
        ),
    ),
    HOODI: NetworkConfig(
        GENESIS_FORK_VERSION=Web3.to_bytes(hexstr='0x10000910'),
        DEPOSIT_CONTRACT_ADDRESS=Web3.to_checksum_address(
            '0x00000000219ab540356cBB839Cbe05303d7705Fa'
        ),
    ),
    GNOSIS: NetworkConfig(
        GENESIS_FORK_VERSION=Web3.to_bytes(hexstr='0x00000064'),
        DEPOSIT_CONTRACT_ADDRESS=Web3.to_checksum_address(
            '0x0B98057eA310F4d31F2a452B414647007d1645d9'
        ),
    ),
    SEPOLIA: NetworkConfig(
        GENESIS_FORK_VERSION=Web3.to_bytes(hexstr='0x90000069'),
        DEPOSIT_CONTRACT_ADDRESS=Web3.to_checksum_address(
            '0x7f02C3E3c98b133055B8B348B2Ac625669Ed295D'
        ),
    ),
}
