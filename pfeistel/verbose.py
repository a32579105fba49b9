import time, sys

b2s = lambda i: f'{i/2**30:.1f}G' if i>=2**30 else f'{i/2**20:.1f}M' if i>=2**20 else f'{i/1024:.1f}K'

def all_stat(stats, written, verbose):
    duration = time.perf_counter() - stats[2]
    verbose('{} blocks, IN: {} OUT: {} ({:.3f}s)'.format(stats[1], b2s(stats[0]), b2s(written), duration))

def realtime_stat(stats):
    duration = time.perf_counter() - stats[2]
    sys.stdout.write('{} blocks, IN: {} ({}/s)\x1b[0K\r'.format(stats[1], b2s(stats[0]), b2s(stats[0]/duration if duration else 0)))
    sys.stdout.flush()

def setup(args):
    def verbose(s):
        if args.v >= 2:
            sys.stdout.write('\x1b[32m'+time.strftime('%Y-%m-%d %H:%M:%S')+'\x1b[m ')
            sys.stdout.write(s+'\x1b[0K\n')
        else:
            sys.stdout.write(s+'\n')
        sys.stdout.flush()
    args.verbose = verbose
    args.stats = [0, 0, time.perf_counter()]
    def stat_bytes(n, stats=args.stats):
        stats[0] += n
        stats[1] += 1
        if args.v >= 2 and stats[1] % 256 == 0:
            realtime_stat(stats)
    args.stat_bytes = stat_bytes
    args.all_stat = lambda written: all_stat(args.stats, written, verbose)
