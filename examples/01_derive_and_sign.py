#!/usr/bin/env python3
"""
Example 1: Derive a Chain Signatures key and request a signature

Fetches the MPC root key, derives the child key for an account and path,
prints its Ethereum and Bitcoin addresses and, when account credentials are
given, asks the MPC network to sign a message hash under that key.

Usage:
    python 01_derive_and_sign.py --account alice.testnet --path ethereum-1
    python 01_derive_and_sign.py --account alice.testnet --path ethereum-1 \\
        --secret-key ed25519:... --message "hello"
"""

import argparse
import hashlib
import logging

from chainsig_client import (
    ContractConfig,
    DerivedKey,
    MpcContract,
    NearAccountSigner,
    NearRpcTransport,
)


def main():
    parser = argparse.ArgumentParser(description="Derive a Chain Signatures key and sign")
    parser.add_argument("--network", default="testnet", choices=["mainnet", "testnet"])
    parser.add_argument("--account", required=True, help="NEAR account that will call sign")
    parser.add_argument("--path", default="ethereum-1", help="Derivation path")
    parser.add_argument("--secret-key", help="NEAR credentials secret of --account (ed25519:...)")
    parser.add_argument("--message", help="Text whose SHA-256 hash gets signed")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    config = ContractConfig(network_id=args.network)
    signer = None
    if args.secret_key:
        signer = NearAccountSigner.from_near_secret(args.account, args.secret_key)

    print(f"=== Chain Signatures on {args.network} ({config.resolved_contract_id}) ===")

    with NearRpcTransport(config.resolved_rpc_url, signer=signer) as transport:
        contract = MpcContract(transport, config)

        root = DerivedKey.from_near(contract.public_key())
        child = root.derive(args.account, args.path)
        print(f"Root key:         {root.near}")
        print(f"Derived key:      {child.near}")
        print(f"Ethereum address: {child.ethereum}")
        print(f"Bitcoin address:  {child.bitcoin_p2pkh}")

        remote = contract.derived_public_key(args.account, args.path)
        print(f"Contract agrees:  {remote == child.near}")

        if signer is None or args.message is None:
            return

        digest = hashlib.sha256(args.message.encode("utf-8")).digest()
        signature = contract.sign(path=args.path, message=digest.hex())
        print(f"Signature (rsv):  {signature.to_rsv().hex()}")
        print(f"Verifies:         {signature.verify(digest, child.public_point)}")


if __name__ == "__main__":
    main()
