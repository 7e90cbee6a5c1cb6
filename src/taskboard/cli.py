from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Any

from loguru import logger

from .client import ApiError, ConsoleApp, ReconcileMode, TaskApiClient, TaskListView
from .config import Settings
from .logging_utils import configure_logging
from .store import Container, StoreError, ensure_default_user


def _settings(args: argparse.Namespace) -> Settings:
    settings = Settings.from_env()
    if args.database_url:
        settings.database_url = args.database_url
    if args.base_url:
        settings.api_base_url = args.base_url
    return settings


def _make_client(args: argparse.Namespace) -> TaskApiClient:
    return TaskApiClient(base_url=_settings(args).api_base_url)


def _emit(payload: Any) -> None:
    sys.stdout.write(json.dumps(payload, indent=2) + '\n')


def _fail(exc: ApiError) -> int:
    sys.stderr.write(f"{exc.detail or exc.kind.value}\n")
    return 1


def _server(args: argparse.Namespace) -> int:
    try:
        import uvicorn
    except ImportError:
        sys.stderr.write("Install server extras: pip install 'taskboard[server]'\n")
        return 1

    # The factory reads CONNECTION_STRING itself, so an override has to travel through the env.
    if args.database_url:
        os.environ["CONNECTION_STRING"] = args.database_url
    logger.info("Starting server on {}:{}", args.host, args.port)
    uvicorn.run(
        "taskboard.server.api:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
    return 0


def _seed(args: argparse.Namespace) -> int:
    try:
        container = Container(_settings(args).database_url)
        try:
            user = ensure_default_user(container.users)
        finally:
            container.dispose()
    except StoreError as exc:
        sys.stderr.write(f"Seeding failed: {exc}\n")
        return 1
    _emit({'user': {'id': user.id, 'email': user.email}})
    return 0


def _task_list(args: argparse.Namespace) -> int:
    with _make_client(args) as api:
        try:
            tasks = api.list_tasks()
        except ApiError as exc:
            return _fail(exc)
    _emit([task.to_wire() for task in tasks])
    return 0


def _task_add(args: argparse.Namespace) -> int:
    with _make_client(args) as api:
        try:
            task = api.create_task(args.title, user_id=args.user_id)
        except ApiError as exc:
            return _fail(exc)
    _emit(task.to_wire())
    return 0


def _set_done(args: argparse.Namespace, is_done: bool) -> int:
    with _make_client(args) as api:
        try:
            current = api.get_task(args.task_id)
            task = api.update_task(current.id, current.title, is_done)
        except ApiError as exc:
            return _fail(exc)
    _emit(task.to_wire())
    return 0


def _task_done(args: argparse.Namespace) -> int:
    return _set_done(args, True)


def _task_undone(args: argparse.Namespace) -> int:
    return _set_done(args, False)


def _task_edit(args: argparse.Namespace) -> int:
    with _make_client(args) as api:
        try:
            current = api.get_task(args.task_id)
            task = api.update_task(current.id, args.title, current.is_done)
        except ApiError as exc:
            return _fail(exc)
    _emit(task.to_wire())
    return 0


def _task_rm(args: argparse.Namespace) -> int:
    if not args.yes:
        answer = input(f"Delete task {args.task_id}? [y/N] ")
        if answer.strip().lower() not in ('y', 'yes'):
            sys.stderr.write("Aborted\n")
            return 1
    with _make_client(args) as api:
        try:
            api.delete_task(args.task_id)
        except ApiError as exc:
            return _fail(exc)
    _emit({'deleted': args.task_id})
    return 0


def _ui(args: argparse.Namespace) -> int:
    with _make_client(args) as api:
        view = TaskListView(api, mode=ReconcileMode(args.mode))
        ConsoleApp(view).run()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Taskboard: task CRUD server and client')
    parser.add_argument('--log-level', default=None, help='Log level (default: $TASKBOARD_LOG_LEVEL or INFO)')
    parser.add_argument('--database-url', default=None, help='Database URL (default: $CONNECTION_STRING)')
    parser.add_argument('--base-url', default=None, help='API base URL for client commands (default: $TASKBOARD_API_BASE_URL)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    server = subparsers.add_parser('server', help='Start the API server')
    server.add_argument('--host', default='127.0.0.1')
    server.add_argument('--port', default=8000, type=int)
    server.add_argument('--reload', action='store_true')
    server.set_defaults(func=_server)

    seed = subparsers.add_parser('seed', help='Create the schema and the default user')
    seed.set_defaults(func=_seed)

    tasks = subparsers.add_parser('tasks', help='Manage tasks through the API')
    task_sub = tasks.add_subparsers(dest='task_cmd', required=True)
    tlist = task_sub.add_parser('list', help='List tasks')
    tlist.set_defaults(func=_task_list)
    tadd = task_sub.add_parser('add', help='Create a task')
    tadd.add_argument('title')
    tadd.add_argument('--user-id', default=None, type=int)
    tadd.set_defaults(func=_task_add)
    tdone = task_sub.add_parser('done', help='Mark a task done')
    tdone.add_argument('task_id', type=int)
    tdone.set_defaults(func=_task_done)
    tundone = task_sub.add_parser('undone', help='Mark a task not done')
    tundone.add_argument('task_id', type=int)
    tundone.set_defaults(func=_task_undone)
    tedit = task_sub.add_parser('edit', help='Rename a task')
    tedit.add_argument('task_id', type=int)
    tedit.add_argument('title')
    tedit.set_defaults(func=_task_edit)
    trm = task_sub.add_parser('rm', help='Delete a task')
    trm.add_argument('task_id', type=int)
    trm.add_argument('--yes', action='store_true', help='Skip the confirmation prompt')
    trm.set_defaults(func=_task_rm)

    ui = subparsers.add_parser('ui', help='Interactive task list')
    ui.add_argument('--mode', default='refetch', choices=[m.value for m in ReconcileMode])
    ui.set_defaults(func=_ui)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level or Settings.from_env().log_level)
    handler = getattr(args, 'func', None)
    if handler is None:
        parser.print_help()
        return 1
    return int(handler(args) or 0)


if __name__ == '__main__':
    sys.exit(main())
