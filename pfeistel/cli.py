import argparse, sys
from .__doc__ import *
from .cipher import get_cipher, BLOCK_SIZE, MIN_ROUNDS, MAX_ROUNDS, INITIAL_KEY
from . import stream

DUMMY = lambda s: s

def cipher_compile(cipher_name):
    err_str, cipher = get_cipher(cipher_name)
    if err_str:
        raise argparse.ArgumentTypeError(err_str)
    return cipher

def check_rounds(rounds):
    if rounds < MIN_ROUNDS:
        return f'Invalid number of rounds: {rounds}. It must be a value of {MIN_ROUNDS} at minimum.'
    if rounds > MAX_ROUNDS:
        return f'Invalid number of rounds: {rounds}. It must be a value no more than {MAX_ROUNDS}.'

def self_test(ciphers, verbose=print):
    vector = bytes([0x2d])*(BLOCK_SIZE//2) + bytes(BLOCK_SIZE//2)
    for cipher in ciphers:
        name = cipher.name() + ("-py" if cipher.PYTHON else "")
        print(f'============ {name} ============')
        c = cipher(1, INITIAL_KEY)
        if c.encrypt_block(bytes(BLOCK_SIZE)) != vector or c.decrypt_block(vector) != bytes(BLOCK_SIZE):
            raise Exception(f'{name}: worked vector mismatch')
        if stream.decrypt_bytes(c, vector) != b'':
            raise Exception(f'{name}: last block zero stripping mismatch')
        plain = bytes(range(256)) * 2
        for rounds in range(MIN_ROUNDS, MAX_ROUNDS+1):
            c = cipher(rounds, INITIAL_KEY)
            if stream.decrypt_bytes(c, stream.encrypt_bytes(c, plain)) != plain:
                raise Exception(f'{name}: round trip mismatch with {rounds} rounds')
            verbose(f'{rounds} rounds ok')
    print('============ success ============')

def main(argv=None):
    parser = argparse.ArgumentParser(description=__description__)
    parser.add_argument('mode', nargs='?', choices=('c', 'd'), help='c to encrypt, d to decrypt')
    parser.add_argument('rounds', nargs='?', type=int, help=f'number of feistel rounds ({MIN_ROUNDS}-{MAX_ROUNDS})')
    parser.add_argument('input_file', nargs='?', help='file to read')
    parser.add_argument('output_file', nargs='?', help='file to write')
    parser.add_argument('-c', dest='cipher', default='feistel', type=cipher_compile, help='cipher implementation, feistel or feistel-py (default: feistel)')
    parser.add_argument('-d', dest='debug', action='count', help='turn on debug to see tracebacks (default: no debug)')
    parser.add_argument('-v', dest='v', action='count', default=0, help='print verbose output')
    parser.add_argument('--test', action='store_true', help='check the cipher implementations and exit')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    args = parser.parse_args(argv)
    args.verbose = args.stat_bytes = DUMMY
    args.all_stat = DUMMY
    if args.v:
        from . import verbose
        verbose.setup(args)
    if args.test:
        from .cipher import MAP
        from .cipherpy import MAP as MAP_PY
        ciphers = [MAP_PY[args.cipher.name()]] if args.cipher.PYTHON else [MAP[args.cipher.name()], MAP_PY[args.cipher.name()]]
        try:
            self_test(ciphers, args.verbose)
        except Exception as ex:
            print(f'Self test failed.\n\t==> {ex}', file=sys.stderr)
            if args.debug:
                raise
            return 1
        return 0
    if args.output_file is None:
        parser.error('the following arguments are required: mode, rounds, input_file, output_file')
    err_str = check_rounds(args.rounds)
    if err_str:
        print(err_str, file=sys.stderr)
        return 1
    process = stream.encrypt_file if args.mode == 'c' else stream.decrypt_file
    args.verbose(f'{"Encrypting" if args.mode == "c" else "Decrypting"} {args.input_file} -> {args.output_file} by {args.cipher.name()}{"-py" if args.cipher.PYTHON else ""} ({args.rounds} rounds)')
    try:
        written = process(args.cipher(args.rounds, INITIAL_KEY), args.input_file, args.output_file, args.stat_bytes)
    except MemoryError:
        print('Memory allocation failed', file=sys.stderr)
        if args.debug:
            raise
        return 1
    except Exception as ex:
        print(str(ex) or ex.__class__.__name__, file=sys.stderr)
        if args.debug:
            raise
        return 1
    args.all_stat(written)
    return 0

if __name__ == '__main__':
    sys.exit(main())
