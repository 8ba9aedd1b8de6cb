import click, json
from qlerror.errors import QueryError, json_default
from qlerror.language.parser import parse_file
from qlerror.runtime.validation import infer_schema, validate

def _load_schema(data_path):
    if not data_path:
        return None
    with open(data_path) as f:
        return infer_schema(json.load(f))

def _collect_errors(path, data_path):
    try:
        document = parse_file(path)
    except QueryError as e:
        return [e]
    return validate(document, _load_schema(data_path))

@click.group()
def cli(): ...

@cli.command()
@click.argument("path")
@click.option("--data", "data_path", default=None, help="JSON file whose shape is the schema")
def check(path, data_path):
    """Parse and validate a query file, printing each error with a source excerpt."""
    errors = _collect_errors(path, data_path)
    if not errors:
        click.echo("OK")
        return
    for err in errors:
        click.echo(str(err), err=True)
        click.echo("", err=True)
    raise SystemExit(1)

@cli.command()
@click.argument("path")
@click.option("--data", "data_path", default=None, help="JSON file whose shape is the schema")
@click.option("-o","--out", default=None, help="Write the error list here instead of stdout")
def errors(path, data_path, out):
    """Emit the serialized errors of a query file as JSON."""
    found = _collect_errors(path, data_path)
    text = json.dumps(found, indent=2, default=json_default)
    if out:
        with open(out, "w") as f:
            f.write(text)
        click.echo(f"Wrote {out}")
    else:
        click.echo(text)

@cli.command()
@click.option("--data", "data_path", default=None, help="JSON file used as the root value")
@click.option("--port", default=8000, help="Server port (default: 8000)")
@click.option("--dev", is_flag=True, help="Attach diagnostic traces to error responses")
def serve(data_path, port: int, dev: bool):
    """
    Start the query API server.

    \b
    Examples:
      qlerror serve --data examples/hero.json
      qlerror serve --data examples/hero.json --port 8080 --dev

    \b
    API Endpoints:
      GET  /healthz   - Health check with queryable fields
      POST /query     - Execute {"query": ..., "operationName": ...}

    \b
    Environment Variables:
      QLERROR_DATA      - Alternative to --data
      QLERROR_DEV_MODE  - Alternative to --dev flag (set to "1")
    """
    import os, uvicorn
    from pathlib import Path

    if data_path:
        if not Path(data_path).exists():
            click.echo(f"Error: Data file not found: {data_path}", err=True)
            raise click.Abort()
        os.environ["QLERROR_DATA"] = data_path
    if dev:
        os.environ["QLERROR_DEV_MODE"] = "1"
        click.echo("Dev mode enabled (traces in error responses)")

    click.echo(f"\nStarting qlerror API server on port {port}...")
    click.echo(f"Health check: http://127.0.0.1:{port}/healthz\n")

    from qlerror.runtime.api import app
    uvicorn.run(app, host="0.0.0.0", port=port)

if __name__ == "__main__":
    cli()
