import argparse
import logging
import sys

import matplotlib.pyplot as plt

from csmacd.protocols import simulate
from csmacd.setting import BackoffAnchor, ConfigError, Sensing, Setting

LOG_FMT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def make_setting(args, **overrides):
    params = dict(node_num=args.nodes, arrival_rate=args.rate, packet_length=args.length, bit_rate=args.bit_rate,
                  node_distance=args.distance, propagation_speed=args.speed, total_time=args.time,
                  sensing=args.sensing, backoff_anchor=args.anchor, max_collisions=args.max_collisions,
                  seed=args.seed)
    params.update(overrides)
    return Setting(**params)


def print_rates(rows):
    print("{:<16}{:>6}{:>8}{:>12}{:>12}{:>12}{:>16}".format(
        "sensing", "N", "A", "attempted", "succeeded", "efficiency", "throughput"))
    for name, n, a, r in rows:
        print("{:<16}{:>6}{:>8g}{:>12.1f}{:>12.1f}{:>12.4f}{:>16.1f}".format(
            name, n, a, r.attempted, r.succeeded, r.efficiency, r.throughput))


def average(results):
    count = len(results)
    return type(results[0])(*[sum(x) / count for x in zip(*results)])


def plot(title, x_label, target, rates, y_label, idx, output=None):
    plt.figure()
    for label, values in rates.items():
        plt.plot(target, [r[idx] for r in values], "s-", label=label)
    plt.title(title)
    plt.xlabel(x_label)
    plt.ylabel(y_label)
    plt.legend(loc="best")
    if output:
        plt.savefig(output)
        plt.close()
    else:
        plt.show()


def run(args):
    setting = make_setting(args)
    result = simulate(setting, show_history=args.history)
    print_rates([(setting.sensing.value, setting.node_num, setting.arrival_rate, result)])


def sweep(args):
    rows = []
    rates = {}
    for sensing in Sensing:
        for a in args.rates:
            label = f"{sensing.value} A={a:g}"
            rates[label] = []
            for n in args.node_list:
                results = []
                for i in range(args.repeat):
                    seed = None if args.seed is None else args.seed + i
                    setting = make_setting(args, node_num=n, arrival_rate=a, sensing=sensing, seed=seed)
                    results.append(simulate(setting))
                result = average(results)
                rates[label].append(result)
                rows.append((sensing.value, n, a, result))
    print_rates(rows)

    if args.no_plot: return
    output = args.output
    plot("Influence of Node Num", "Node Num", args.node_list, rates, "Efficiency", 2,
         None if output is None else output + "_efficiency.png")
    plot("Influence of Node Num", "Node Num", args.node_list, rates, "Throughput (bps)", 3,
         None if output is None else output + "_throughput.png")


def build_parser():
    parser = argparse.ArgumentParser(prog="csmacd", description="CSMA/CD shared bus simulator")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v for info, -vv for every step")
    sub = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--nodes", type=int, default=20)
    common.add_argument("--rate", type=float, default=7.0, help="arrival rate per node (frames/s)")
    common.add_argument("--length", type=float, default=1500, help="frame length (bits)")
    common.add_argument("--bit-rate", type=float, default=1e6, help="channel rate (bits/s)")
    common.add_argument("--distance", type=float, default=10.0, help="distance between adjacent nodes (m)")
    common.add_argument("--speed", type=float, default=2e8, help="propagation speed (m/s)")
    common.add_argument("--time", type=float, default=1000.0, help="simulation horizon (s)")
    common.add_argument("--sensing", choices=[s.value for s in Sensing], default=Sensing.PERSISTENT.value)
    common.add_argument("--anchor", choices=[a.value for a in BackoffAnchor],
                        default=BackoffAnchor.FARTHEST_COLLISION.value)
    common.add_argument("--max-collisions", type=int, default=10)
    common.add_argument("--seed", type=int, default=None)

    p = sub.add_parser("run", parents=[common], help="run one simulation")
    p.add_argument("--history", action="store_true", help="print every resolved event")
    p.set_defaults(func=run)

    p = sub.add_parser("sweep", parents=[common], help="sweep node count and arrival rate")
    p.add_argument("--node-list", type=int, nargs="+", default=[20, 40, 60, 80, 100])
    p.add_argument("--rates", type=float, nargs="+", default=[7.0, 10.0, 20.0])
    p.add_argument("--repeat", type=int, default=1, help="runs averaged per point")
    p.add_argument("--no-plot", action="store_true")
    p.add_argument("--output", default=None, help="save plots with this file prefix instead of showing them")
    p.set_defaults(func=sweep)
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    level = logging.WARNING
    if args.verbose == 1: level = logging.INFO
    elif args.verbose > 1: level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FMT)

    try:
        args.func(args)
    except ConfigError as e:
        parser.error(str(e))
    return 0


if __name__ == "__main__":
    sys.exit(main())
