from ._buffer import FlatBufferLike

__all__ = [FlatBufferLike.__name__]
