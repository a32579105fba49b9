import re, sys
import pytest
from pfeistel import cli, stream
from pfeistel.cipherpy import MAP as MAP_PY
from pfeistel.cipher import BLOCK_SIZE, BlockSizeError

TEXT = b'Lorem ipsum dolor sit amet, consectetur adipiscing elit.\n' * 7

@pytest.fixture
def files(tmp_path):
    plain = tmp_path / 'plain.txt'
    plain.write_bytes(TEXT)
    return plain, tmp_path / 'secret.bin', tmp_path / 'out.txt'

@pytest.mark.parametrize('cipher', ['feistel', 'feistel-py'])
def test_round_trip(files, cipher):
    plain, secret, out = files
    for rounds in range(1, 9):
        assert cli.main(['-c', cipher, 'c', str(rounds), str(plain), str(secret)]) == 0
        assert len(secret.read_bytes()) % BLOCK_SIZE == 0
        assert cli.main(['-c', cipher, 'd', str(rounds), str(secret), str(out)]) == 0
        assert out.read_bytes() == TEXT

def test_backends_compatible(files):
    plain, secret, out = files
    assert cli.main(['c', '5', str(plain), str(secret)]) == 0
    assert cli.main(['-c', 'feistel-py', 'd', '5', str(secret), str(out)]) == 0
    assert out.read_bytes() == TEXT

@pytest.mark.parametrize('rounds, message', [
    ('0', 'Invalid number of rounds: 0. It must be a value of 1 at minimum.'),
    ('9', 'Invalid number of rounds: 9. It must be a value no more than 8.'),
])
def test_bad_rounds(files, capsys, rounds, message):
    plain, secret, out = files
    assert cli.main(['c', rounds, str(plain), str(secret)]) == 1
    assert capsys.readouterr().err.strip() == message
    assert not secret.exists()

@pytest.mark.parametrize('argv', [
    ['x', '1', 'a', 'b'],
    ['c', 'one', 'a', 'b'],
    ['c', '1', 'a'],
    [],
    ['-c', 'rot13', 'c', '1', 'a', 'b'],
    ['c', '1', 'a', 'b', 'extra'],
])
def test_usage_errors(argv):
    with pytest.raises(SystemExit) as ex:
        cli.main(argv)
    assert ex.value.code == 2

def test_missing_input(files, capsys):
    plain, secret, out = files
    assert cli.main(['c', '1', str(plain) + '.missing', str(secret)]) == 1
    assert capsys.readouterr().err.startswith('Input file error: ')
    assert not secret.exists()

def test_bad_ciphertext(files, capsys):
    plain, secret, out = files
    secret.write_bytes(bytes(BLOCK_SIZE*2 + 10))
    assert cli.main(['d', '1', str(secret), str(out)]) == 1
    assert capsys.readouterr().err.strip() == f'Invalid block size: 10, expected: {BLOCK_SIZE}'
    assert len(out.read_bytes()) == BLOCK_SIZE*2
    with pytest.raises(BlockSizeError):
        cli.main(['-d', 'd', '1', str(secret), str(out)])

def test_verbose(files, capsys):
    plain, secret, out = files
    assert cli.main(['-v', 'c', '2', str(plain), str(secret)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == f'Encrypting {plain} -> {secret} by feistel (2 rounds)'
    assert lines[1].startswith('4 blocks, IN: 0.4K OUT: 0.5K')

def test_self_test(capsys):
    assert cli.main(['--test']) == 0
    out = capsys.readouterr().out
    assert '============ feistel ============' in out
    assert '============ feistel-py ============' in out
    assert out.rstrip().endswith('============ success ============')

def test_version(capsys):
    with pytest.raises(SystemExit) as ex:
        cli.main(['--version'])
    assert ex.value.code == 0
    assert capsys.readouterr().out.strip().endswith(cli.__version__)

def test_verbose_realtime(files, capsys):
    plain, secret, out = files
    plain.write_bytes(b'x' * BLOCK_SIZE * 300)
    assert cli.main(['-vv', 'c', '1', str(plain), str(secret)]) == 0
    out = capsys.readouterr().out
    assert re.match(r'\x1b\[32m\d{4}-\d\d-\d\d \d\d:\d\d:\d\d\x1b\[m Encrypting ', out)
    assert '256 blocks, IN: 32.0K (' in out
    assert '/s)\x1b[0K\r' in out
    assert re.search(r'\x1b\[m 300 blocks, IN: 37\.5K OUT: 37\.5K \(\d+\.\d{3}s\)\x1b\[0K\n$', out)

def test_self_test_failure(monkeypatch, capsys):
    monkeypatch.setattr(MAP_PY['feistel'], 'feistel_round', lambda self, left, right, key: (right, left))
    assert cli.main(['--test']) == 1
    captured = capsys.readouterr()
    assert captured.err == 'Self test failed.\n\t==> feistel-py: worked vector mismatch\n'
    assert '============ success ============' not in captured.out
    with pytest.raises(Exception) as ex:
        cli.main(['-d', '--test'])
    assert str(ex.value) == 'feistel-py: worked vector mismatch'

def test_self_test_python_only(monkeypatch, capsys):
    monkeypatch.setitem(sys.modules, 'Crypto', None)
    assert cli.main(['-c', 'feistel-py', '--test']) == 0
    out = capsys.readouterr().out
    assert '============ feistel-py ============' in out
    assert '============ feistel ============' not in out
    with pytest.raises(SystemExit) as ex:
        cli.main(['--test'])
    assert ex.value.code == 2
    assert 'pip3 install pycryptodome' in capsys.readouterr().err

def test_memory_error(files, monkeypatch, capsys):
    plain, secret, out = files
    def encrypt_file(*args):
        raise MemoryError()
    monkeypatch.setattr(stream, 'encrypt_file', encrypt_file)
    assert cli.main(['c', '1', str(plain), str(secret)]) == 1
    assert capsys.readouterr().err == 'Memory allocation failed\n'
    with pytest.raises(MemoryError):
        cli.main(['-d', 'c', '1', str(plain), str(secret)])
