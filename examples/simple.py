from mont32 import Montgomery

if __name__ == '__main__':

    p = 1280541179
    M = Montgomery.factory(mod=p)

    x_, y_ = 1115177062, 95490452  # x', y' as elements in Z_p

    # raw interface: integers in, integers out
    a_ = M.convert_in(x_)
    b_ = M.convert_in(y_)
    c_ = M.multiply(a_, b_)
    assert M.convert_out(c_) == x_ * y_ % p

    # enter the Montgomery domain
    x, y = M(x_), M(y_)
    R = M.R
    assert M.one == R % p
    assert (R * M.r_inv_mod) % p == 1
    assert R * M.r_inv_mod - 1 == M.n_inv_mod * p

    a = x + y
    a_ = (x_ + y_) * R % p
    assert a.value == a_

    b = x - y
    b_ = (x_ - y_) * R % p
    assert b.value == b_

    c = x * y
    c_ = (x_ * y_) * R % p
    assert c.value == c_

    g = y ** 65537
    assert int(g) == pow(y_, 65537, p)

    # exit the Montgomery domain
    _x, _y = int(x), int(y)
    assert _x == x_
    assert _y == y_
    print(f'succeeded!')
