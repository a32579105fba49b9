from .cipher import BaseCipher, HALF_BLOCK_SIZE

# Pure Python Ciphers

XOR_TABLES = tuple(bytes(i^key for i in range(256)) for key in range(256))

class Feistel_Cipher(BaseCipher):
    PYTHON = True
    def feistel_round(self, left, right, key):
        keyed = right.translate(XOR_TABLES[key])
        mixed = int.from_bytes(left, 'big') ^ int.from_bytes(keyed, 'big')
        return right, mixed.to_bytes(HALF_BLOCK_SIZE, 'big')

MAP = {cls.name(): cls for name, cls in globals().items() if name.endswith('_Cipher')}
