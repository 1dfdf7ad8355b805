from prun.main import prun

if __name__ == "__main__":  # pragma: no cover
    prun()
