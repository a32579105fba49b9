import io
from .cipher import BLOCK_SIZE, BlockSizeError

DUMMY = lambda s: s

class FileError(OSError):
    def __init__(self, role, ex):
        super().__init__(ex.errno, f'{role} file error: {ex.strerror or ex}', ex.filename)
    def __str__(self):
        return self.strerror

def read_block(reader):
    buf = bytearray()
    while len(buf) < BLOCK_SIZE:
        data = reader.read(BLOCK_SIZE - len(buf))
        if not data:
            break
        buf.extend(data)
    return bytes(buf)

def encrypt_stream(cipher, reader, writer, stat_bytes=DUMMY):
    written = 0
    while True:
        block = read_block(reader)
        if not block:
            break
        stat_bytes(len(block))
        if len(block) < BLOCK_SIZE:
            block += bytes(BLOCK_SIZE - len(block))
        writer.write(cipher.encrypt_block(block))
        written += BLOCK_SIZE
    return written

def decrypt_stream(cipher, reader, writer, stat_bytes=DUMMY):
    written = 0
    block = read_block(reader)
    while block:
        if len(block) != BLOCK_SIZE:
            raise BlockSizeError(f'Invalid block size: {len(block)}, expected: {BLOCK_SIZE}')
        stat_bytes(len(block))
        data = cipher.decrypt_block(block)
        block = read_block(reader)
        if not block:
            # padding cannot be told apart from trailing zeros of the plaintext
            data = data.rstrip(b'\x00')
        writer.write(data)
        written += len(data)
    return written

def encrypt_bytes(cipher, data):
    writer = io.BytesIO()
    encrypt_stream(cipher, io.BytesIO(data), writer)
    return writer.getvalue()

def decrypt_bytes(cipher, data):
    writer = io.BytesIO()
    decrypt_stream(cipher, io.BytesIO(data), writer)
    return writer.getvalue()

def open_file(filename, mode, role):
    try:
        return open(filename, mode)
    except OSError as ex:
        raise FileError(role, ex)

def process_file(process, cipher, input_file, output_file, stat_bytes=DUMMY):
    with open_file(input_file, 'rb', 'Input') as reader:
        with open_file(output_file, 'wb', 'Output') as writer:
            return process(cipher, reader, writer, stat_bytes)

def encrypt_file(cipher, input_file, output_file, stat_bytes=DUMMY):
    return process_file(encrypt_stream, cipher, input_file, output_file, stat_bytes)

def decrypt_file(cipher, input_file, output_file, stat_bytes=DUMMY):
    return process_file(decrypt_stream, cipher, input_file, output_file, stat_bytes)
