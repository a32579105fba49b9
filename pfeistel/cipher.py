BLOCK_SIZE = 128
HALF_BLOCK_SIZE = BLOCK_SIZE // 2
INITIAL_KEY = 0b10010110
MIN_ROUNDS, MAX_ROUNDS = 1, 8

ROL = lambda a, b: (a<<b|a>>8-b) & 0xff

class BlockSizeError(ValueError):
    pass

def generate_key(base_key, n):
    return ROL(base_key & 0xff, n % 8)

def round_keys(base_key, rounds, decrypt=False):
    return tuple(generate_key(base_key, rounds-i if decrypt else i+1) for i in range(rounds))

class BaseCipher(object):
    PYTHON = False
    CACHE = {}
    def __init__(self, rounds, key=INITIAL_KEY):
        if not isinstance(rounds, int) or not MIN_ROUNDS <= rounds <= MAX_ROUNDS:
            raise ValueError(f'rounds must be in [{MIN_ROUNDS}, {MAX_ROUNDS}], got {rounds}')
        if not isinstance(key, int) or not 0 <= key <= 0xff:
            raise ValueError(f'key must be a single byte, got {key}')
        self.rounds = rounds
        self.key = key
        keys = self.CACHE.get((key, rounds))
        if keys is None:
            keys = self.CACHE[(key, rounds)] = round_keys(key, rounds), round_keys(key, rounds, True)
        self.encrypt_keys, self.decrypt_keys = keys
        self.setup()
    def setup(self):
        pass
    def process(self, block, keys):
        if len(block) != BLOCK_SIZE:
            raise BlockSizeError(f'Invalid block size: {len(block)}, expected: {BLOCK_SIZE}')
        left, right = bytes(block[:HALF_BLOCK_SIZE]), bytes(block[HALF_BLOCK_SIZE:])
        for key in keys:
            left, right = self.feistel_round(left, right, key)
        return right + left
    def encrypt_block(self, block):
        return self.process(block, self.encrypt_keys)
    def decrypt_block(self, block):
        return self.process(block, self.decrypt_keys)
    def encrypt(self, s):
        if len(s) % BLOCK_SIZE:
            raise BlockSizeError(f'Invalid data size: {len(s)}, expected a multiple of {BLOCK_SIZE}')
        return b''.join(self.encrypt_block(s[i:i+BLOCK_SIZE]) for i in range(0, len(s), BLOCK_SIZE))
    def decrypt(self, s):
        if len(s) % BLOCK_SIZE:
            raise BlockSizeError(f'Invalid data size: {len(s)}, expected a multiple of {BLOCK_SIZE}')
        return b''.join(self.decrypt_block(s[i:i+BLOCK_SIZE]) for i in range(0, len(s), BLOCK_SIZE))
    @classmethod
    def name(cls):
        return cls.__name__.replace('_Cipher', '').replace('_', '-').lower()

class Feistel_Cipher(BaseCipher):
    def setup(self):
        from Crypto.Util.strxor import strxor, strxor_c
        self.strxor, self.strxor_c = strxor, strxor_c
    def feistel_round(self, left, right, key):
        return right, self.strxor(left, self.strxor_c(right, key))

MAP = {cls.name(): cls for name, cls in globals().items() if name.endswith('_Cipher')}

def get_cipher(cipher_name):
    from .cipherpy import MAP as MAP_PY
    python = cipher_name.endswith('-py')
    base_name = cipher_name[:-3] if python else cipher_name
    if base_name not in MAP and base_name not in MAP_PY:
        return f'existing ciphers: {sorted(set(MAP)|set(n+"-py" for n in MAP_PY))}', None
    if python:
        return None, MAP_PY[base_name]
    try:
        assert __import__('Crypto').version_info >= (3, 4)
    except Exception:
        return 'this cipher needs library: "pip3 install pycryptodome"', None
    return None, MAP[base_name]
