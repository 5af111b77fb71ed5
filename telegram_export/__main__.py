from telegram_export.pipeline import main

if __name__ == "__main__":
    exit(main())
