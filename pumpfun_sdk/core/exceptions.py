# pumpfun_sdk/core/exceptions.py

class PumpFunSdkException(Exception):
    """Base class for every error raised by this library."""
    pass

class DecodeError(PumpFunSdkException):
    """For account buffers that cannot be interpreted with the known layouts."""
    pass

class InvalidDiscriminator(DecodeError):
    """The leading 8 bytes do not identify the expected account type."""
    pass

class TruncatedBuffer(DecodeError):
    """The buffer is shorter than the minimum layout length."""
    pass

class CurveComplete(PumpFunSdkException):
    """Pricing was requested against a curve whose liquidity has migrated."""
    pass

class InsufficientReserves(PumpFunSdkException):
    """The trade size exceeds what the curve can settle."""
    pass

class ArithmeticOverflow(PumpFunSdkException):
    """An amount or result does not fit in an unsigned 64-bit integer."""
    pass

class InvalidBasisPoints(PumpFunSdkException, ValueError):
    """Fee or slippage basis points outside the accepted range."""
    pass

class NoValidAddress(PumpFunSdkException):
    """No bump seed produced an off-curve program address."""
    pass

class UnknownEventType(PumpFunSdkException):
    """An event name outside the known set (raised only in strict decoding)."""
    pass

class AccountNotFound(PumpFunSdkException):
    """The RPC node returned no account at the requested address."""
    pass
