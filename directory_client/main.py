# directory_client/main.py
import asyncio
import logging
import argparse
import json
import sys

from directory_client.config import settings
from directory_client.directory_view import DirectoryView
from directory_client.employee_client import ApiError, DirectoryClient
from directory_client.utils import format_employee_table

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Employee Directory Client')

    parser.add_argument('--server', '-s', type=str, default=settings.SERVER_URL,
                        help='Server URL')

    commands = parser.add_subparsers(dest='command', required=True)

    commands.add_parser('health', help='Check that the server is up')

    list_cmd = commands.add_parser('list', help='List employees, most recent first')
    list_cmd.add_argument('--search', '-q', type=str, default='',
                          help='Only show employees whose name, email or position contains this text')

    get_cmd = commands.add_parser('get', help='Show one employee')
    get_cmd.add_argument('id', type=int)

    add_cmd = commands.add_parser('add', help='Add an employee')
    edit_cmd = commands.add_parser('edit', help='Replace an employee\'s details')
    edit_cmd.add_argument('id', type=int)
    for cmd in (add_cmd, edit_cmd):
        cmd.add_argument('--name', required=True)
        cmd.add_argument('--email', required=True)
        cmd.add_argument('--position', required=True)

    delete_cmd = commands.add_parser('delete', help='Delete an employee')
    delete_cmd.add_argument('id', type=int)
    delete_cmd.add_argument('--yes', '-y', action='store_true',
                            help='Do not ask for confirmation')

    return parser


def confirm_on_terminal(prompt: str) -> bool:
    answer = input(f"{prompt} [y/N] ")
    return answer.strip().lower() in ('y', 'yes')


def print_notifications(view: DirectoryView):
    for notification in view.notifications:
        stream = sys.stderr if notification.severity == 'error' else sys.stdout
        print(notification.message, file=stream)
    view.notifications.clear()


async def run_command(args, client: DirectoryClient) -> int:
    view = DirectoryView(client)

    if args.command == 'health':
        result = await client.health()
        print(json.dumps(result))
        return 0

    if args.command == 'get':
        employee = await client.get_employee(args.id)
        print(format_employee_table([employee]))
        return 0

    if args.command == 'list':
        ok = await view.refresh()
        print_notifications(view)
        if not ok:
            return 1
        print(format_employee_table(view.search(args.search)))
        return 0

    if args.command in ('add', 'edit'):
        data = {'name': args.name, 'email': args.email, 'position': args.position}
        employee_id = args.id if args.command == 'edit' else None
        result = await view.save(data, employee_id=employee_id)
        for field_name, message in view.form_errors.items():
            print(f"{field_name}: {message}", file=sys.stderr)
        print_notifications(view)
        if result is None:
            return 1
        print(format_employee_table([result]))
        return 0

    if args.command == 'delete':
        confirm = (lambda prompt: True) if args.yes else confirm_on_terminal
        deleted = await view.remove(args.id, confirm)
        failed = any(n.severity == 'error' for n in view.notifications)
        print_notifications(view)
        if deleted:
            return 0
        if not failed:
            print("Delete cancelled")
            return 0
        return 1

    return 1


async def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    async with DirectoryClient(server_url=args.server) as client:
        try:
            return await run_command(args, client)
        except ApiError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return 1


def run():
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Process interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    run()
