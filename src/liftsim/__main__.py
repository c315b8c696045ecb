import logging
import os


def main() -> None:
    logging.basicConfig(
        level=os.environ.get("LIFTSIM_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        from .sim import LiftSimulatorApp
    except ModuleNotFoundError as exc:
        if exc.name in ("pygame", "requests"):
            print(f"Missing dependency: {exc.name}")
            print("Install the project first, then run with your project venv:")
            print("  pip install -e .")
            print("  ./.venv/bin/python -m liftsim")
            raise SystemExit(1)
        raise

    app = LiftSimulatorApp()
    app.run()


if __name__ == "__main__":
    main()
