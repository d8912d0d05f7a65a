import asyncio
import sys

from dotenv import load_dotenv
from loguru import logger

from heartless_chat.app_config import load_json_config, parse_app_config, resolve_runtime_env
from heartless_chat.bootstrap import bootstrap_runtime
from heartless_chat.shell import read_message


async def main() -> None:
    load_dotenv()

    app = parse_app_config(load_json_config())
    env = resolve_runtime_env()

    runtime = bootstrap_runtime(app, env)

    if not env.api_key:
        logger.error(f"{env.api_key_env_var} environment variable is required.")
        await runtime.close()
        sys.exit(1)

    print(f"{app.title} (type 'exit' to quit, '/help' for commands)")
    print(f"Model: {app.model}")
    if runtime.log_descriptions:
        print(f"Logging: {', '.join(runtime.log_descriptions)}")
    print()
    runtime.view.render_pending_messages()
    print()

    try:
        while True:
            try:
                user_input = await read_message(lambda prompt: asyncio.to_thread(input, prompt))
            except (EOFError, KeyboardInterrupt):
                break

            trimmed = user_input.strip()

            if trimmed in ("exit", "quit"):
                break

            if not trimmed:
                continue

            try:
                await runtime.shell.handle_input(user_input)
                print()
            except Exception as ex:
                logger.error(f"Unhandled error: {ex}")
    finally:
        await runtime.close()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
