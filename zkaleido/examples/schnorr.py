"""A program verifying BIP-340 Schnorr signatures over secp256k1."""

from __future__ import annotations

import hashlib
import os
import secrets
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from ..codec import FixedArray, Primitive
from ..interfaces import ZkVmEnv, ZkVmHost, ZkVmInputBuilder
from ..program import ZkVmProgramPerf
from ..proof import PublicValues
from ..vm import ProofType

_P = 2**256 - 2**32 - 977
_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
_G = (
    0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
)

_BYTES32 = FixedArray(Primitive.U8, 32)

_Point = Optional[Tuple[int, int]]


def _add(a: _Point, b: _Point) -> _Point:
    if a is None:
        return b
    if b is None:
        return a
    if a[0] == b[0] and (a[1] + b[1]) % _P == 0:
        return None
    if a == b:
        lam = 3 * a[0] * a[0] * pow(2 * a[1], -1, _P) % _P
    else:
        lam = (b[1] - a[1]) * pow(b[0] - a[0], -1, _P) % _P
    x = (lam * lam - a[0] - b[0]) % _P
    return x, (lam * (a[0] - x) - a[1]) % _P


def _mul(point: _Point, scalar: int) -> _Point:
    result: _Point = None
    while scalar:
        if scalar & 1:
            result = _add(result, point)
        point = _add(point, point)
        scalar >>= 1
    return result


def _bytes32(value: int) -> bytes:
    return value.to_bytes(32, "big")


def _int(data: bytes) -> int:
    return int.from_bytes(data, "big")


def _tagged_hash(tag: str, message: bytes) -> bytes:
    tag_hash = hashlib.sha256(tag.encode("ascii")).digest()
    return hashlib.sha256(tag_hash + tag_hash + message).digest()


def _lift_x(x: int) -> _Point:
    if x >= _P:
        return None
    c = (pow(x, 3, _P) + 7) % _P
    y = pow(c, (_P + 1) // 4, _P)
    if y * y % _P != c:
        return None
    return x, y if y % 2 == 0 else _P - y


def _x_only_public_key(sk: bytes) -> bytes:
    point = _mul(_G, _int(sk))
    assert point is not None
    return _bytes32(point[0])


def _sign(msg: bytes, sk: bytes, aux: bytes) -> bytes:
    if len(sk) != 32:
        raise ValueError("Invalid private key")
    d0 = _int(sk)
    if not 1 <= d0 < _N:
        raise ValueError("Invalid private key")
    if len(msg) != 32:
        raise ValueError("Invalid message hash")
    public = _mul(_G, d0)
    assert public is not None
    d = d0 if public[1] % 2 == 0 else _N - d0
    t = _bytes32(d ^ _int(_tagged_hash("BIP0340/aux", aux)))
    px = _bytes32(public[0])
    k0 = _int(_tagged_hash("BIP0340/nonce", t + px + msg)) % _N
    if k0 == 0:
        raise ValueError("nonce generation failed")
    nonce_point = _mul(_G, k0)
    assert nonce_point is not None
    k = k0 if nonce_point[1] % 2 == 0 else _N - k0
    rx = _bytes32(nonce_point[0])
    e = _int(_tagged_hash("BIP0340/challenge", rx + px + msg)) % _N
    return rx + _bytes32((k + e * d) % _N)


def _verify(sig: bytes, msg: bytes, pk: bytes) -> bool:
    if len(msg) != 32 or len(pk) != 32 or len(sig) != 64:
        return False
    public = _lift_x(_int(pk))
    if public is None:
        return False
    r = _int(sig[:32])
    s = _int(sig[32:])
    if r >= _P or s >= _N:
        return False
    e = _int(_tagged_hash("BIP0340/challenge", sig[:32] + pk + msg)) % _N
    point = _add(_mul(_G, s), _mul(public, _N - e))
    if point is None or point[1] % 2 != 0 or point[0] != r:
        return False
    return True


def sign_schnorr_sig(msg: bytes, sk: bytes) -> bytes:
    """Sign a 32-byte message hash with a 32-byte secret key; return 64 bytes.

    Raises ValueError for an invalid key or message.
    """
    return _sign(bytes(msg), bytes(sk), os.urandom(32))


def verify_schnorr_sig(sig: bytes, msg: bytes, pk: bytes) -> bool:
    """Verify a signature against a message hash and x-only public key."""
    return _verify(bytes(sig), bytes(msg), bytes(pk))


def verify_schnorr_sig_k256(sig: bytes, msg: bytes, pk: bytes) -> bool:
    """Verify a signature, checking the signature scalars are in range first."""
    sig = bytes(sig)
    if len(sig) != 64 or _int(sig[:32]) >= _P or _int(sig[32:]) >= _N:
        return False
    return _verify(sig, bytes(msg), bytes(pk))


@dataclass(frozen=True)
class SchnorrSigInput:
    """A signature, the signed message hash, and the key pair."""

    sig: bytes
    msg: bytes
    pk: bytes
    sk: bytes

    @classmethod
    def new_random(cls) -> "SchnorrSigInput":
        """Create a random message, key pair and a valid signature."""
        msg = os.urandom(32)
        while True:
            sk = secrets.token_bytes(32)
            if 1 <= _int(sk) < _N:
                break
        pk = _x_only_public_key(sk)
        sig = sign_schnorr_sig(msg, sk)
        return cls(sig=sig, msg=msg, pk=pk, sk=sk)


def process_schnorr_sig_verify(zkvm: ZkVmEnv) -> None:
    """Read a signature, message and key; commit whether the signature verifies."""
    sig = zkvm.read_buf()
    if len(sig) != 64:
        raise ValueError(f"signature must be 64 bytes, got {len(sig)}")
    msg = zkvm.read_serde(_BYTES32)
    pk = zkvm.read_serde(_BYTES32)
    zkvm.commit_serde(verify_schnorr_sig_k256(sig, msg, pk), Primitive.BOOL)


class SchnorrSigProgram(ZkVmProgramPerf):
    """Proves verification of a Schnorr signature; output is a bool."""

    def name(self) -> str:
        return "schnorr_sig_verify"

    def proof_type(self) -> ProofType:
        return ProofType.CORE

    def prepare_input(self, input: SchnorrSigInput, builder: ZkVmInputBuilder) -> Any:
        return (
            builder.write_buf(input.sig)
            .write_serde(input.msg, _BYTES32)
            .write_serde(input.pk, _BYTES32)
            .build()
        )

    def process_output(self, public_values: PublicValues, host: ZkVmHost) -> bool:
        return host.extract_serde_public_output(public_values, Primitive.BOOL)