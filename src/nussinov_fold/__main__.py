from nussinov_fold.scripts.predict_structure import main


if __name__ == '__main__':
    raise SystemExit(main())
