from studygo_anki.scraper.run import main

if __name__ == "__main__":
    # Reads urls.txt and writes anki.csv in the working directory unless the
    # STUDYGO_* environment variables point elsewhere.
    raise SystemExit(main())
