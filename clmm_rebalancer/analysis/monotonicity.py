#!/usr/bin/env python
"""
예치 최적화 단조성 검증

이분 탐색은 스왑 수량에 대해 funded가 False → True 로, within_dust가
True → False 로만 바뀐다고 가정합니다. 이 모듈은 [0, coin_a_amount] 구간을
등간격으로 샘플링해 그 가정이 실제 풀 상태에서 성립하는지 확인합니다.

Usage:
  python -m clmm_rebalancer.analysis.monotonicity --lower -600 --upper 600 \\
      --sqrt-price 18446744073709551616 --amount 1000000000 --mark-price 1000000000
"""
import argparse
from typing import Any, Dict

import numpy as np
import pandas as pd

from ..config import configure_logging, settings
from ..zap.deposit_optimizer import AddLiquidityOnlyCoinARequest, evaluate_swap_candidate

COLUMNS = [
    "swap_amount", "remaining_a", "received_b", "liquidity",
    "required_a", "required_b", "funded", "within_dust",
    "leftover_a", "leftover_b",
]


def scan_swap_amounts(
    request: AddLiquidityOnlyCoinARequest,
    mark_price: int,
    num_points: int = 101
) -> pd.DataFrame:
    """스왑 수량을 등간격으로 평가한 결과 테이블

    Args:
        request: 예치 요청
        mark_price: A→B mark price (1e9 스케일)
        num_points: 샘플 수 (양 끝 포함)

    Returns:
        스왑 수량 오름차순 DataFrame. 중복 수량은 한 번만 평가
    """
    if num_points < 2:
        raise ValueError(f"num_points는 2 이상이어야 합니다: {num_points}")

    # 큰 정수는 float 정밀도를 넘으므로 정수 연산으로 샘플 위치를 계산
    fractions = np.linspace(0.0, 1.0, num_points)
    total = request.coin_a_amount
    swap_amounts = sorted({total * int(round(f * 1_000_000)) // 1_000_000 for f in fractions})

    rows = []
    for swap_amount in swap_amounts:
        c = evaluate_swap_candidate(request, mark_price, swap_amount)
        rows.append({
            "swap_amount": c.swap_amount,
            "remaining_a": c.remaining_a,
            "received_b": c.received_b,
            "liquidity": c.liquidity,
            "required_a": c.required_a,
            "required_b": c.required_b,
            "funded": c.is_funded,
            "within_dust": c.is_within_dust,
            "leftover_a": c.leftover_a,
            "leftover_b": c.leftover_b,
        })

    return pd.DataFrame(rows, columns=COLUMNS)


def check_monotonicity(df: pd.DataFrame) -> Dict[str, Any]:
    """scan_swap_amounts 결과에서 이분 탐색 가정 확인

    Returns:
        {
            'funded_monotone': funded가 비감소인지,
            'dust_monotone': funded 구간에서 within_dust가 비증가인지,
            'first_funded': 처음 funded가 되는 스왑 수량 (없으면 None),
            'acceptable_count': 채택 가능한 샘플 수,
            'bisect_safe': 두 가정이 모두 성립하는지,
        }
    """
    funded = df["funded"].astype(int)
    funded_rows = df[df["funded"]]
    within_dust = funded_rows["within_dust"].astype(int)

    funded_monotone = bool(funded.is_monotonic_increasing)
    dust_monotone = bool(within_dust.is_monotonic_decreasing)
    acceptable = df["funded"] & df["within_dust"]

    first_funded = None
    if len(funded_rows) > 0:
        first_funded = int(funded_rows["swap_amount"].iloc[0])

    return {
        "funded_monotone": funded_monotone,
        "dust_monotone": dust_monotone,
        "first_funded": first_funded,
        "acceptable_count": int(acceptable.sum()),
        "bisect_safe": funded_monotone and dust_monotone,
    }


def main():
    parser = argparse.ArgumentParser(
        description="단일 토큰 예치 탐색 공간의 단조성 검증",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # 포지션
    parser.add_argument("--lower", type=int, required=True, help="하한 틱")
    parser.add_argument("--upper", type=int, required=True, help="상한 틱")
    parser.add_argument("--sqrt-price", type=int, required=True, help="현재 sqrtPriceX64")

    # 예치
    parser.add_argument("--amount", type=int, required=True, help="token A 수량 (최소 단위)")
    parser.add_argument("--mark-price", type=int, required=True, help="A→B mark price (1e9 스케일)")
    parser.add_argument("--max-remain-rate", type=int, default=settings.MAX_REMAIN_RATE,
                        help="잔여 허용 비율 (1e9 = 100%%)")
    parser.add_argument("--points", type=int, default=101, help="샘플 수")
    parser.add_argument("--csv", type=str, help="결과 CSV 저장 경로")

    args = parser.parse_args()
    configure_logging()

    request = AddLiquidityOnlyCoinARequest(
        tick_lower=args.lower,
        tick_upper=args.upper,
        sqrt_price_x64=args.sqrt_price,
        coin_a_amount=args.amount,
        coin_a_type="A",
        coin_b_type="B",
        max_remain_rate=args.max_remain_rate,
    )

    df = scan_swap_amounts(request, args.mark_price, args.points)
    report = check_monotonicity(df)

    print("=" * 60)
    print(f"샘플 {len(df)}개, 채택 가능 {report['acceptable_count']}개")
    print(f"funded 비감소:      {report['funded_monotone']}")
    print(f"within_dust 비증가: {report['dust_monotone']}")
    print(f"첫 funded 스왑 수량: {report['first_funded']}")
    print(f"이분 탐색 사용 가능: {report['bisect_safe']}")
    print("=" * 60)

    if args.csv:
        df.to_csv(args.csv, index=False)
        print(f"저장: {args.csv}")


if __name__ == "__main__":
    main()
