from sparse_matrix.scripts.demo_matrix import main

if __name__ == '__main__':
    raise SystemExit(main())
