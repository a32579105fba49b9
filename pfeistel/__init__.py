from .__doc__ import *
from .cipher import BLOCK_SIZE, HALF_BLOCK_SIZE, INITIAL_KEY, MIN_ROUNDS, MAX_ROUNDS, BlockSizeError, generate_key, round_keys, get_cipher
from .stream import FileError, encrypt_stream, decrypt_stream, encrypt_bytes, decrypt_bytes, encrypt_file, decrypt_file

def Cipher(rounds, key=INITIAL_KEY, name='feistel'):
    err_str, cipher = get_cipher(name)
    if err_str:
        raise ValueError(err_str)
    return cipher(rounds, key)
