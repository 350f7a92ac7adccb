from cordon import Command, Cordon, ExitError, Flag
from cordon.utils import setup_logging

setup_logging()


def open_session(ctx):
    ctx.metadata["greeted"] = []


def greet(ctx):
    names = ctx.args or [ctx.get("name")]
    for name in names:
        greeting = f"Hello, {name}!"
        print(greeting.upper() if ctx.lookup("shout") else greeting)
        ctx.metadata["greeted"].append(name)
    return len(names)


def close_session(ctx):
    print(f"Greeted {len(ctx.metadata.get('greeted', []))} people.")


def fail(ctx):
    raise ExitError(f"refusing to greet {ctx.args or 'nobody'}", exit_code=3)


def on_usage_error(ctx, error, is_subcommand):
    return ExitError(f"greet: {error}", exit_code=2)


app = Cordon(
    name="greet",
    description="Say hello from the command line.",
    flags=[Flag("shout", type=bool, aliases=["s"], usage="Upper-case the output")],
    debug_hooks=True,
)
app.add_command_from_command(
    Command(
        name="hello",
        aliases=["hi"],
        usage="Greet one or more people",
        flags=[Flag("name", default="world", aliases=["n"], usage="Default name")],
        before=open_session,
        action=greet,
        after=close_session,
        on_usage_error=on_usage_error,
    )
)
app.add_command("refuse", fail, usage="Always fails with exit code 3")
app.add_command("echo", lambda ctx: print(*ctx.args), skip_flag_parsing=True)

# Entry point
if __name__ == "__main__":
    app.main()
