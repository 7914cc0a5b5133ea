from .aes_gcm_codec import AesGcmFieldCodec

__all__ = ["AesGcmFieldCodec"]
