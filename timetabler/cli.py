#!/usr/bin/env python3
"""
Command-line interface for the timetable manager.
Provides a simple way to seed data, generate timetables and add entries
from the command line.
"""
import argparse
import logging
import json
import sys

from .config import get_store_config, get_app_config
from .data.seed import seed_sample_data
from .data.store import RecordNotFound
from .models.entities import EntryCandidate, EntryAdded, WEEK_DAYS
from .scheduler import TimetableService, create_store


def parse_args(argv=None):
    """Parse command-line arguments."""
    store_config = get_store_config()
    app_config = get_app_config()

    parser = argparse.ArgumentParser(
        description='Academic Timetable Manager CLI',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument(
        '--data-dir',
        type=str,
        default=store_config['data_dir'],
        help='Directory containing the catalog and timetable CSV files'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default=app_config['log_level'].upper(),
        help='Logging level'
    )

    parser.add_argument(
        '--json-output',
        action='store_true',
        help='Output results as JSON'
    )

    commands = parser.add_subparsers(dest='command', required=True)

    commands.add_parser('seed', help='Replace the catalogs with sample data')
    commands.add_parser('generate', help='Generate a new timetable from the catalogs')
    commands.add_parser('show', help='Print the stored timetable as a grid')
    commands.add_parser('slots', help='List free slots with available teachers and rooms')
    commands.add_parser('clear', help='Remove every timetable entry')

    export = commands.add_parser('export', help='Export the timetable to CSV files')
    export.add_argument('--output-dir', type=str, default='output', help='Directory to save output CSV files')

    add_entry = commands.add_parser('add-entry', help='Add a single timetable entry')
    add_entry.add_argument('--course', required=True)
    add_entry.add_argument('--teacher', required=True)
    add_entry.add_argument('--room', required=True)
    add_entry.add_argument('--day', required=True, choices=WEEK_DAYS)
    add_entry.add_argument('--start-time', required=True, help='HH:MM')
    add_entry.add_argument('--end-time', default='', help='HH:MM')
    add_entry.add_argument('--kind', default='lecture', choices=['lecture', 'lab'])

    delete_entry = commands.add_parser('delete-entry', help='Delete a timetable entry by id')
    delete_entry.add_argument('entry_id')

    return parser.parse_args(argv)


def setup_logging(log_level):
    """Configure logging."""
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f'Invalid log level: {log_level}')

    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def run_command(service: TimetableService, args) -> int:
    """
    Run one subcommand and print its result.

    Returns:
        Process exit status
    """
    if args.command == 'seed':
        seed_sample_data(service.store)
        counts = service.summary()
        if args.json_output:
            print(json.dumps(counts, indent=2))
        else:
            print("Sample data loaded:")
            for name, count in counts.items():
                print(f"  {name}: {count}")
        return 0

    if args.command == 'generate':
        result = service.generate_timetable()
        if args.json_output:
            print(json.dumps(result.to_dict(), indent=2))
        else:
            print("\nGeneration Results:")
            if result.success:
                print(f"  {result.message}")
                for entry in result.entries:
                    print(f"  {entry.day:<10} {entry.start_time}-{entry.end_time}  "
                          f"{entry.course} / {entry.teacher} / {entry.room}")
                if result.unassigned:
                    print(f"\n  Unassigned: {', '.join(result.unassigned)}")
            else:
                print(f"  Error ({result.reason.value}): {result.message}")

            print("\nPerformance metrics:")
            for metric, value in result.metrics.items():
                print(f"  {metric}: {value:.2f} seconds")
        return 0 if result.success else 1

    if args.command == 'show':
        grid = service.timetable_grid()
        if args.json_output:
            print(grid.to_json(orient='index', indent=2))
        elif grid.empty:
            print("Timetable is empty")
        else:
            print(grid.to_string())
        return 0

    if args.command == 'slots':
        slots = service.available_slots()
        if args.json_output:
            print(json.dumps([s.to_dict() for s in slots], indent=2))
        else:
            print(f"{len(slots)} free slots:")
            for slot in slots:
                print(f"  {slot.day:<10} {slot.start_time}-{slot.end_time} ({slot.kind})")
                print(f"    teachers: {', '.join(slot.available_teachers) or '-'}")
                print(f"    rooms: {', '.join(slot.available_rooms) or '-'}")
        return 0

    if args.command == 'add-entry':
        candidate = EntryCandidate(
            course=args.course,
            teacher=args.teacher,
            room=args.room,
            day=args.day,
            start_time=args.start_time,
            end_time=args.end_time,
            kind=args.kind
        )
        result = service.insert_manual_entry(candidate)
        if args.json_output:
            body = {'success': isinstance(result, EntryAdded), 'message': result.message}
            if isinstance(result, EntryAdded):
                body['entry'] = result.entry.to_dict()
            print(json.dumps(body, indent=2))
        else:
            print(result.message)
        return 0 if isinstance(result, EntryAdded) else 1

    if args.command == 'delete-entry':
        if not service.delete_entry(args.entry_id):
            raise RecordNotFound('timetable', args.entry_id)
        print(f"Deleted entry {args.entry_id}")
        return 0

    if args.command == 'clear':
        service.clear_timetable()
        print("Timetable cleared")
        return 0

    if args.command == 'export':
        output_files = service.export_timetable(args.output_dir)
        if args.json_output:
            print(json.dumps(output_files, indent=2))
        else:
            print("Output files:")
            for name, path in output_files.items():
                print(f"  {name}: {path}")
        return 0

    print(f"Unknown command: {args.command}")
    return 1


def main(argv=None):
    """Main entry point for the CLI."""
    # Parse command-line arguments
    args = parse_args(argv)

    # Setup logging
    setup_logging(args.log_level)

    try:
        service = TimetableService(create_store('csv', args.data_dir))
        status = run_command(service, args)
    except (LookupError, ValueError, OSError) as e:
        print(f"Error: {str(e)}")
        sys.exit(1)

    if status:
        sys.exit(status)


if __name__ == '__main__':
    main()
