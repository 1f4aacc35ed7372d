from dotenv import load_dotenv
load_dotenv()

from pollguard import create_app  # noqa: E402

application = create_app()

if __name__ == "__main__":
    application.run()
