"""Exceptions raised by the transform kernel."""


class TransformError(ValueError):
    """Base class for every error raised by ringntt."""


class InvalidLengthError(TransformError):
    """A vector length disagrees with the engine degree or a twiddle table."""


class InvalidDegreeError(InvalidLengthError):
    """A transform degree is not a power of two."""


class NotPrimeError(TransformError):
    """A modulus expected to be prime failed the primality test."""


class InvalidOrderError(TransformError):
    """The requested root order does not divide modulus - 1."""


class PrimitiveRootNotFoundError(TransformError):
    """No primitive root (or no root of the requested order) was found."""


class InvalidGCDError(TransformError):
    """The operands are not coprime, so no modular inverse exists."""


class InvalidExponentError(TransformError):
    """An exponent below -1 was passed to modular exponentiation."""


class LengthNotPowerOfTwoError(TransformError):
    """Bit-reversal was requested on a sequence whose length is not a power of two."""


class UnequalModulusError(TransformError):
    """Two polynomials use different coefficient moduli."""


class UnequalDegreeError(TransformError):
    """Two polynomials have different degrees."""
