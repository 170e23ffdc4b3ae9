from paramdist import Weights, by_rune

wr = by_rune(Weights(1, 1, 1)).replace("0", "o", 0.2).delete(" ", 0.1)

print(wr.distance_with_detail("B00k shelf", "Bookshelf"))
# (0.5, EditCounts(insert=0, delete=1, replace=2, match=7))

for op in wr.explain("B00k shelf", "Bookshelf"):
    print(op)
# EditOperation(op_type=<EditKind.REPLACE: 2>, source_token='0', target_token='o', cost=0.2)
# EditOperation(op_type=<EditKind.REPLACE: 2>, source_token='0', target_token='o', cost=0.2)
# EditOperation(op_type=<EditKind.DELETE: 1>, source_token=' ', target_token=None, cost=0.1)
