#!/usr/bin/env python3
"""
Call Tree Analyzer - command line interface
"""

import json
import logging
import sys
from call_tree_analyzer import CallTreeAnalyzer, CallTreeError
from call_tree_analyzer.core.types import DURATION_UNITS, FILTER_OPERATORS
from call_tree_analyzer.web import prepare_results


def parse_filter(spec):
    """
    Parse FIELD:OPERATOR[:VALUE]. VALUE is decoded as JSON when possible,
    so '100' is a number and '"100"' a string.
    """
    import argparse
    parts = spec.split(':', 2)
    if len(parts) < 2 or parts[1] not in FILTER_OPERATORS:
        raise argparse.ArgumentTypeError(
            f"invalid filter '{spec}', expected FIELD:OPERATOR[:VALUE] "
            f"with OPERATOR one of {', '.join(FILTER_OPERATORS)}"
        )
    node_filter = {'field': parts[0], 'operator': parts[1]}
    if len(parts) == 3:
        try:
            node_filter['value'] = json.loads(parts[2])
        except ValueError:
            node_filter['value'] = parts[2]
    return node_filter


def print_report(results):
    summary = results['summary']
    print(f"\nRoot: {summary['root_name']} ({summary['root_id']})"
          + (" [virtual]" if summary['is_virtual_root'] else ""))
    print(f"Nodes: {summary['node_count']}, max depth {summary['max_depth']}, "
          f"{summary['error_count']} with errors")
    print(f"Summed duration: {summary['subtree_duration_formatted']} "
          f"({summary['subtree_duration']:.3f} {summary['duration_unit']})")
    print(f"Wall clock: {summary['wall_clock_duration_formatted']} "
          f"(parallelism x{summary['parallelism_factor']:.2f})")

    critical_path = results['critical_path']
    print(f"\nCritical path ({critical_path['duration_formatted']}):")
    for depth, node in enumerate(critical_path['nodes']):
        print(f"  {'  ' * depth}{node['name']} [{node['duration_formatted']}]")

    resources = results['resources']
    print(f"\nResources: cpu {resources['cpu']}%, memory {resources['memory']} KB, "
          f"network {resources['network']} B")

    if results['search'] is not None:
        hit = results['search']
        print(f"\nFirst search match: {hit.get('name')} ({hit.get('id')})")
    if results['highlighted'] is not None:
        node = results['highlighted']
        print(f"\nHighlighted node {node.get('id')}:")
        print(json.dumps({k: v for k, v in node.items() if k != 'children'}, indent=2))
    if results['tree'] is None:
        print("\nNo nodes matched the filters.")


def main():
    import argparse
    parser = argparse.ArgumentParser(
        description='Analyze call tree JSON files (a node tree or a flat node list).',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python analyze_calltree.py trace.json
  python analyze_calltree.py trace.json --search checkout
  python analyze_calltree.py trace.json --filter metadata.serviceName:equals:'"billing"'
  python analyze_calltree.py trace.json --filter duration:greaterThan:100 --anonymize -o out.json
        """
    )
    parser.add_argument('input_file', help='Path to the call tree JSON file')
    parser.add_argument('-o', '--output', dest='output_file', help='Write full JSON results to this file')
    parser.add_argument('--search', help='Deep search query')
    parser.add_argument('--case-sensitive', action='store_true', help='Case sensitive search')
    parser.add_argument('--highlight', metavar='NODE_ID', help='Show details for the node with this id')
    parser.add_argument('--filter', dest='filters', action='append', type=parse_filter, default=[],
                        metavar='FIELD:OP[:VALUE]', help='Filter clause, may be repeated (ANDed)')
    parser.add_argument('--anonymize', action='store_true', help='Redact sensitive data in the output')
    parser.add_argument('--duration-unit', choices=DURATION_UNITS, default='ms',
                        help='Unit for reported durations')
    parser.add_argument('--strip-children', action='store_true',
                        help='Drop children from flattened entries in the output')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log progress and warnings')
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.ERROR)

    analyzer = CallTreeAnalyzer(
        duration_unit=args.duration_unit,
        case_sensitive_search=args.case_sensitive,
        strip_flattened_children=args.strip_children
    )

    try:
        print(f"\nConfiguration:")
        print(f"  Input file: {args.input_file}")
        print(f"  Filters: {len(args.filters)}")
        print(f"  Anonymize: {args.anonymize}")
        print(f"  Duration unit: {args.duration_unit}")
        if analyzer.process_trace_file(args.input_file) is None:
            print("No nodes found.")
            sys.exit(1)

        results = prepare_results(
            analyzer,
            filters=args.filters,
            search_query=args.search,
            highlight_id=args.highlight,
            anonymize_output=args.anonymize
        )
        print_report(results)

        if args.output_file:
            with open(args.output_file, 'w') as f:
                json.dump(results, f, indent=2)
            print(f"\nResults written to {args.output_file}")
        print(f"\n✓ Analysis complete!")
    except FileNotFoundError:
        print(f"Error: File '{args.input_file}' not found.")
        sys.exit(1)
    except CallTreeError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
